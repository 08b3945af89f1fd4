import datetime
import itertools
from typing import Dict, List, Optional, Union

from voice_alarm.alarm.alarm_item import AlarmItem, parse_time_of_day
from voice_alarm.alarm.alarm_observer import AlarmObservable
from voice_alarm.alarm.scheduler import AlarmScheduler
from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.audio.playback_trigger import PlaybackTrigger, get_playback_trigger
from voice_alarm.errors import InvalidInputError


class AlarmRegistry(AlarmObservable):
    """
    Alle aktuell geplanten Alarme, in Einfügereihenfolge.

    Alle Methoden laufen auf dem Thread des Eventloops; Aufrufer aus anderen
    Threads müssen über `loop.call_soon_threadsafe` gehen.
    """

    def __init__(
        self,
        scheduler: Optional[AlarmScheduler] = None,
        playback: Optional[PlaybackTrigger] = None,
        id_prefix: str = "A",
    ):
        super().__init__()
        self.scheduler = scheduler or AlarmScheduler()
        self.playback = playback or get_playback_trigger()
        self._alarms: Dict[str, AlarmItem] = {}
        self._id_prefix = id_prefix
        self._counter = itertools.count(1)

    def add(
        self,
        time_of_day: Union[str, datetime.time],
        audio_artifact: Optional[AudioArtifact],
    ) -> str:
        """
        Legt einen Alarm an und plant ihn für das nächste Auftreten der Uhrzeit.

        Args:
            time_of_day: 'HH:MM' oder datetime.time
            audio_artifact: Die abzuspielende Aufnahme

        Returns:
            str: ID des Alarms

        Raises:
            InvalidInputError: Aufnahme fehlt oder Uhrzeit ist ungültig
        """
        if audio_artifact is None:
            raise InvalidInputError("Keine Aufnahme vorhanden")
        parsed_time = parse_time_of_day(time_of_day)

        alarm_id = self._next_id()
        alarm = AlarmItem(id=alarm_id, time_of_day=parsed_time, audio_artifact=audio_artifact)
        alarm.pending_action = self.scheduler.arm(
            parsed_time, lambda: self._fire(alarm_id)
        )
        self._alarms[alarm_id] = alarm

        self.logger.info(
            "⏰ Alarm #%s gesetzt: %s (in %s)",
            alarm_id,
            alarm.fire_at.strftime("%Y-%m-%d %H:%M"),
            alarm.pending_action.delay,
        )
        self._changed()
        return alarm_id

    def cancel(self, alarm_id: str) -> bool:
        """Bricht einen Alarm ab. Unbekannte IDs werden ignoriert."""
        alarm = self._alarms.pop(alarm_id, None)
        if alarm is None:
            self.logger.debug("⏰ Kein Alarm #%s zum Abbrechen vorhanden", alarm_id)
            return False

        self.scheduler.disarm(alarm.pending_action)
        self.logger.info("⏰ Alarm #%s abgebrochen", alarm_id)
        self._changed()
        return True

    def remove(self, alarm_id: str) -> bool:
        """Entfernt einen ausgelösten Alarm, ohne ihn erneut zu entschärfen."""
        if self._alarms.pop(alarm_id, None) is None:
            return False
        self._changed()
        return True

    def get(self, alarm_id: str) -> Optional[AlarmItem]:
        return self._alarms.get(alarm_id)

    def list_alarms(self) -> List[AlarmItem]:
        return list(self._alarms.values())

    def play(self, alarm_id: str) -> bool:
        """Spielt die Aufnahme eines Alarms manuell ab, ohne die Planung zu ändern."""
        alarm = self.get(alarm_id)
        if alarm is None:
            return False
        return self.playback.play(alarm.audio_artifact)

    def shutdown(self) -> None:
        """Entschärft alle Alarme und leert die Registry."""
        for alarm in self._alarms.values():
            self.scheduler.disarm(alarm.pending_action)
        had_alarms = bool(self._alarms)
        self._alarms.clear()
        if had_alarms:
            self._changed()
        self.logger.info("⏰ Alarm-System heruntergefahren")

    def __len__(self) -> int:
        return len(self._alarms)

    def __contains__(self, alarm_id: object) -> bool:
        return alarm_id in self._alarms

    def _fire(self, alarm_id: str) -> None:
        alarm = self._alarms.get(alarm_id)
        if alarm is None:
            return

        self.logger.info("⏰ ALARM #%s wird ausgelöst!", alarm_id)
        try:
            self.playback.play(alarm.audio_artifact)
        finally:
            # Der Alarm gilt auch bei fehlgeschlagener Wiedergabe als verbraucht
            self.remove(alarm_id)

    def _next_id(self) -> str:
        return f"{self._id_prefix}{next(self._counter)}"

    def _changed(self) -> None:
        self.notify_alarms_changed(self.list_alarms())
