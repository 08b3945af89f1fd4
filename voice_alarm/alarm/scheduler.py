"""
Zeitberechnung und einmalige, verzögerte Auslösung von Alarmen auf dem asyncio-Eventloop.
"""
import asyncio
import datetime
from typing import Callable, Optional

from voice_alarm.clock import Clock, SystemClock
from voice_alarm.config.settings import ONE_DAY_SECONDS
from voice_alarm.util.logging_mixin import LoggingMixin


def next_occurrence(
    time_of_day: datetime.time, now: datetime.datetime
) -> datetime.datetime:
    """
    Nächstes Auftreten der Uhrzeit ab `now`.

    Liegt die Uhrzeit heute bereits (echt) in der Vergangenheit, werden genau
    24 Stunden addiert, unabhängig von Kalendergrenzen.
    """
    target = now.replace(
        hour=time_of_day.hour, minute=time_of_day.minute, second=0, microsecond=0
    )
    if target < now:
        target += datetime.timedelta(seconds=ONE_DAY_SECONDS)
    return target


def compute_delay(
    time_of_day: datetime.time, now: datetime.datetime
) -> datetime.timedelta:
    return next_occurrence(time_of_day, now) - now


class PendingAction(LoggingMixin):
    """Einmalige verzögerte Aktion; endet entweder ausgelöst oder abgebrochen."""

    def __init__(
        self,
        delay: datetime.timedelta,
        fire_at: datetime.datetime,
        on_fire: Callable[[], None],
    ):
        self.delay = delay
        self.fire_at = fire_at
        self._on_fire = on_fire
        self._task: Optional[asyncio.Task] = None
        self._fired = False
        self._cancelled = False

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return not (self._fired or self._cancelled)

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        self._task = loop.create_task(self._wait_and_fire())

    def cancel(self) -> bool:
        """Bricht die Aktion ab. False, wenn sie bereits ausgelöst oder abgebrochen wurde."""
        if not self.active:
            return False
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()
        return True

    def fire(self) -> bool:
        """Führt die Aktion höchstens einmal aus."""
        if not self.active:
            return False
        # Vor dem Callback markieren, damit ein disarm() währenddessen wirkungslos ist
        self._fired = True
        self._on_fire()
        return True

    async def _wait_and_fire(self):
        try:
            await asyncio.sleep(self.delay.total_seconds())
        except asyncio.CancelledError:
            return

        try:
            self.fire()
        except Exception as e:
            self.logger.error("❌ Fehler beim Auslösen der geplanten Aktion: %s", e)


class AlarmScheduler(LoggingMixin):
    def __init__(
        self,
        clock: Optional[Clock] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.clock: Clock = clock or SystemClock()
        self._loop = loop

    def arm(
        self, time_of_day: datetime.time, on_fire: Callable[[], None]
    ) -> PendingAction:
        """
        Plant `on_fire` für das nächste Auftreten der Uhrzeit.

        Die Verzögerung wird einmalig beim Scharfschalten berechnet und bei
        späteren Sprüngen der Systemuhr nicht nachkorrigiert.
        """
        now = self.clock()
        fire_at = next_occurrence(time_of_day, now)
        action = PendingAction(delay=fire_at - now, fire_at=fire_at, on_fire=on_fire)
        action.start(self._loop or asyncio.get_running_loop())

        self.logger.debug(
            "⏰ Aktion geplant für %s (in %.0f Sekunden)",
            fire_at.strftime("%Y-%m-%d %H:%M:%S"),
            action.delay.total_seconds(),
        )
        return action

    def disarm(self, action: Optional[PendingAction]) -> bool:
        if action is None:
            return False
        return action.cancel()
