from io import BytesIO

import pygame
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.audio.strategy.audio_playback_strategy import AudioPlaybackStrategy
from voice_alarm.errors import PlaybackError
from voice_alarm.util.logging_mixin import LoggingMixin

# MIME-Subtyp -> ffmpeg-Format
_FFMPEG_FORMATS = {"mpeg": "mp3", "x-wav": "wav", "wave": "wav"}


class PygameAudioStrategy(AudioPlaybackStrategy, LoggingMixin):
    def __init__(self):
        self._current_volume = 1.0

    def initialize(self):
        """Initialisiert den Pygame-Mixer."""
        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init()
            except pygame.error as e:
                self.logger.error("❌ Pygame-Audiosystem nicht verfügbar: %s", e)
                return
        self.logger.info("✅ Pygame-Audiosystem initialisiert")

    def play_artifact(self, artifact: AudioArtifact) -> None:
        """Dekodiert die Aufnahme mit pydub und startet sie auf einem freien Kanal."""
        if not pygame.mixer.get_init():
            raise PlaybackError("Pygame-Mixer ist nicht initialisiert")

        subtype = artifact.mime_type.split("/")[-1]
        audio_format = _FFMPEG_FORMATS.get(subtype, subtype) or None
        try:
            sound = AudioSegment.from_file(BytesIO(artifact.data), format=audio_format)
        except (CouldntDecodeError, IndexError, OSError) as e:
            raise PlaybackError(f"Aufnahme konnte nicht dekodiert werden: {e}") from e

        audio_io = BytesIO()
        try:
            sound.export(audio_io, format="wav")
            audio_io.seek(0)

            pygame_sound = pygame.mixer.Sound(audio_io)
            pygame_sound.set_volume(max(0.0, min(1.0, self._current_volume)))
            pygame_sound.play()
        except pygame.error as e:
            raise PlaybackError(f"Pygame konnte die Aufnahme nicht abspielen: {e}") from e
        finally:
            audio_io.close()

    def is_playing(self) -> bool:
        return bool(pygame.mixer.get_init()) and pygame.mixer.get_busy()

    def stop_playback(self):
        """Stoppt alle Pygame-Audio-Wiedergaben."""
        if pygame.mixer.get_init():
            pygame.mixer.stop()

    def set_volume(self, volume: float):
        """Setzt die Lautstärke für alle aktiven Pygame-Kanäle."""
        self._current_volume = volume
        if not pygame.mixer.get_init():
            return
        for i in range(pygame.mixer.get_num_channels()):
            channel = pygame.mixer.Channel(i)
            if channel.get_busy():
                channel.set_volume(volume)
