import io
import queue
import wave
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import numpy as np

from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.config.settings import (
    BLOCK_DURATION_S,
    CHANNELS,
    MIN_RECORDING_BLOCKS,
    SAMPLE_RATE,
)
from voice_alarm.errors import CaptureError
from voice_alarm.util.logging_mixin import LoggingMixin


@dataclass
class RecorderConfig:
    """Konfiguration für die Mikrofonaufnahme."""

    samplerate: int = SAMPLE_RATE
    channels: int = CHANNELS
    block_duration: float = BLOCK_DURATION_S
    min_blocks: int = MIN_RECORDING_BLOCKS


StreamFactory = Callable[[RecorderConfig, Callable], Any]


def open_input_stream(config: RecorderConfig, callback: Callable):
    """Öffnet und startet einen sounddevice-InputStream."""
    try:
        import sounddevice as sd
    except OSError as e:
        # PortAudio fehlt auf dem System
        raise CaptureError(f"Kein Audio-Backend verfügbar: {e}") from e

    try:
        stream = sd.InputStream(
            samplerate=config.samplerate,
            channels=config.channels,
            dtype=np.int16,
            blocksize=int(config.samplerate * config.block_duration),
            callback=callback,
        )
        stream.start()
    except (sd.PortAudioError, ValueError) as e:
        raise CaptureError(f"Mikrofon konnte nicht geöffnet werden: {e}") from e
    return stream


class AudioRecorder(LoggingMixin):
    """Nimmt zwischen start() und stop() vom Mikrofon auf und liefert WAV-Daten."""

    def __init__(
        self,
        config: Optional[RecorderConfig] = None,
        stream_factory: Optional[StreamFactory] = None,
    ):
        self.config = config or RecorderConfig()
        self.audio_queue: "queue.Queue[np.ndarray]" = queue.Queue()
        self._stream_factory = stream_factory or open_input_stream
        self._stream = None

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def audio_callback(self, indata, frames, time, status):
        if status:
            self.logger.debug("Input-Status: %s", status)
        if self.is_recording:
            self.audio_queue.put(indata.copy())

    def start(self) -> None:
        if self.is_recording:
            raise CaptureError("Es läuft bereits eine Aufnahme")

        self._drain_queue()

        try:
            self._stream = self._stream_factory(self.config, self.audio_callback)
        except CaptureError as e:
            self.logger.error("❌ %s", e)
            raise

        self.logger.info("🎙 Aufnahme gestartet...")

    def stop(self) -> AudioArtifact:
        """Beendet die Aufnahme, gibt das Mikrofon frei und liefert die Aufnahme."""
        if not self.is_recording:
            raise CaptureError("Es läuft keine Aufnahme")

        stream = self._stream
        self._stream = None
        try:
            stream.stop()
        finally:
            stream.close()

        buffer = self._drain_queue()
        self.logger.info("⏹ Aufnahme beendet (%d Blöcke)", len(buffer))

        if len(buffer) < max(1, self.config.min_blocks):
            raise CaptureError("Die Aufnahme ist leer")

        audio_data = np.concatenate(buffer, axis=0)
        return AudioArtifact(
            data=self._to_wav(audio_data),
            mime_type="audio/wav",
            sample_rate=self.config.samplerate,
        )

    def _drain_queue(self) -> List[np.ndarray]:
        chunks = []
        while True:
            try:
                chunks.append(self.audio_queue.get_nowait())
            except queue.Empty:
                return chunks

    def _to_wav(self, audio_data: np.ndarray) -> bytes:
        with io.BytesIO() as wav_io:
            with wave.open(wav_io, "wb") as wf:
                wf.setnchannels(self.config.channels)
                wf.setsampwidth(2)
                wf.setframerate(self.config.samplerate)
                wf.writeframes(audio_data.astype(np.int16).tobytes())
            return wav_io.getvalue()
