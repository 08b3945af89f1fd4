import datetime
import io
import wave
from dataclasses import dataclass, field
from typing import Optional

from voice_alarm.config.settings import DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class AudioArtifact:
    """Unveränderliche Aufnahme, die einem Alarm gehört."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE
    sample_rate: Optional[int] = None
    created_at: datetime.datetime = field(default_factory=datetime.datetime.now)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def duration_seconds(self) -> Optional[float]:
        """Dauer in Sekunden, nur für WAV-Daten bestimmbar."""
        if self.mime_type != "audio/wav":
            return None
        try:
            with wave.open(io.BytesIO(self.data), "rb") as wf:
                return wf.getnframes() / float(wf.getframerate())
        except (wave.Error, EOFError):
            return None
