"""
Observer Pattern für die Alarm-Registry: Beobachter erhalten nach jeder Änderung die komplette Liste.
"""
from typing import List, Sequence

from voice_alarm.alarm.alarm_item import AlarmItem
from voice_alarm.clock import format_time_of_day
from voice_alarm.util.logging_mixin import LoggingMixin


class AlarmObserver:
    """Interface für Klassen, die die Alarmliste darstellen wollen."""

    def on_alarms_changed(self, alarms: List[AlarmItem]):
        """Wird nach jedem add/cancel/Auslösen mit der aktuellen Liste aufgerufen."""
        pass


class AlarmObservable(LoggingMixin):
    """Mixin für Klassen, die Änderungen an der Alarmliste veröffentlichen."""

    def __init__(self):
        self._observers: List[AlarmObserver] = []

    def add_observer(self, observer: AlarmObserver):
        if observer not in self._observers:
            self._observers.append(observer)
            self.logger.debug("Observer added: %s", observer.__class__.__name__)

    def remove_observer(self, observer: AlarmObserver):
        if observer in self._observers:
            self._observers.remove(observer)
            self.logger.debug("Observer removed: %s", observer.__class__.__name__)

    def notify_alarms_changed(self, alarms: List[AlarmItem]):
        for observer in self._observers:
            try:
                observer.on_alarms_changed(list(alarms))
            except Exception as e:
                self.logger.error(
                    "Error notifying observer %s: %s", observer.__class__.__name__, e
                )


class AlarmListLogger(AlarmObserver, LoggingMixin):
    """Einfache Darstellung der Alarmliste über das Logging."""

    @staticmethod
    def render(alarms: Sequence[AlarmItem]) -> List[str]:
        return [f"{format_time_of_day(a.time_of_day)}  [{a.id}]" for a in alarms]

    def on_alarms_changed(self, alarms: List[AlarmItem]):
        if not alarms:
            self.logger.info("⏰ Keine Alarme gesetzt")
            return
        self.logger.info("⏰ %d Alarm(e):", len(alarms))
        for line in self.render(alarms):
            self.logger.info("   %s", line)
