import threading
from typing import Optional

from singleton_decorator import singleton

from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.audio.strategy.audio_playback_strategy import AudioPlaybackStrategy
from voice_alarm.config.settings import DEFAULT_VOLUME
from voice_alarm.util.decorator import log_exceptions_from_self_logger
from voice_alarm.util.logging_mixin import LoggingMixin


@singleton
class PlaybackTrigger(LoggingMixin):
    """Startet die Wiedergabe von Aufnahmen, ohne auf deren Ende zu warten.

    Wird sowohl beim Auslösen eines Alarms als auch für das manuelle
    Anhören ("Play") verwendet. Jeder Aufruf ist eine eigenständige Wiedergabe.
    """

    def __init__(
        self,
        strategy: Optional[AudioPlaybackStrategy] = None,
        volume: float = DEFAULT_VOLUME,
    ):
        self._lock = threading.Lock()

        if strategy is None:
            from voice_alarm.audio.strategy.pygame_audio_strategy import (
                PygameAudioStrategy,
            )

            self.strategy = PygameAudioStrategy()
        else:
            self.strategy = strategy

        self.strategy.initialize()

        self._current_volume = DEFAULT_VOLUME
        self.volume = volume

    def play(self, artifact: AudioArtifact, block: bool = False) -> bool:
        """Spielt eine Aufnahme ab.

        Args:
            artifact: Die abzuspielende Aufnahme
            block: Nur zum Testen/Debuggen: im aufrufenden Thread starten

        Returns:
            bool: False, wenn keine Aufnahme übergeben wurde oder die
            blockierende Wiedergabe fehlgeschlagen ist
        """
        if artifact is None:
            self.logger.warning("❌ Keine Aufnahme zum Abspielen übergeben")
            return False

        if block:
            return self._play_artifact(artifact)

        threading.Thread(
            target=self._play_artifact, args=(artifact,), daemon=True
        ).start()
        return True

    @log_exceptions_from_self_logger("beim Abspielen der Aufnahme", default=False)
    def _play_artifact(self, artifact: AudioArtifact) -> bool:
        with self._lock:
            self.logger.info("🔊 Spiele Aufnahme ab (%d Bytes)", len(artifact))
            self.strategy.play_artifact(artifact)
            return True

    def is_playing(self) -> bool:
        return self.strategy.is_playing()

    def stop(self):
        """Stoppt alle laufenden Wiedergaben."""
        self.strategy.stop_playback()

    @property
    def volume(self) -> float:
        return self._current_volume

    @volume.setter
    def volume(self, value: float):
        """
        Setzt die Lautstärke zwischen 0.0 und 1.0.
        """
        if value > 1.0:
            value = value / 100.0

        value = max(0.0, min(1.0, value))

        self._current_volume = value

        self.strategy.set_volume(value)

        self.logger.info(f"🔊 Lautstärke auf {value:.2f} ({value*100:.0f}%) gesetzt")


def get_playback_trigger() -> PlaybackTrigger:
    """Gibt die globale PlaybackTrigger-Instanz zurück."""
    return PlaybackTrigger()
