import datetime
import re
from typing import Optional, Union

from voice_alarm.alarm.scheduler import PendingAction
from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.clock import format_time_of_day
from voice_alarm.errors import InvalidInputError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_of_day(value: Union[str, datetime.time]) -> datetime.time:
    """Wandelt 'HH:MM' (oder ein time-Objekt) in eine Uhrzeit ohne Sekunden um."""
    if isinstance(value, datetime.time):
        return datetime.time(value.hour, value.minute)

    if not isinstance(value, str):
        raise InvalidInputError(f"Ungültige Uhrzeit: {value!r}")

    m = _TIME_RE.match(value.strip())
    if not m:
        raise InvalidInputError(f"Ungültige Uhrzeit: {value!r} (erwartet HH:MM)")

    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidInputError(f"Ungültige Uhrzeit: {value!r}")
    return datetime.time(hour, minute)


class AlarmItem:
    def __init__(
        self,
        id: str,
        time_of_day: datetime.time,
        audio_artifact: AudioArtifact,
    ):
        self.id = id
        self.time_of_day = time_of_day
        self._audio_artifact = audio_artifact
        self.pending_action: Optional[PendingAction] = None

    @property
    def audio_artifact(self) -> AudioArtifact:
        return self._audio_artifact

    @property
    def fire_at(self) -> Optional[datetime.datetime]:
        if self.pending_action is None:
            return None
        return self.pending_action.fire_at

    def __str__(self) -> str:
        return f"Alarm #{self.id} at {format_time_of_day(self.time_of_day)}"

    def __repr__(self) -> str:
        return f"AlarmItem(id={self.id!r}, time_of_day={self.time_of_day!r})"
