from abc import ABC, abstractmethod

from voice_alarm.audio.audio_artifact import AudioArtifact


class AudioPlaybackStrategy(ABC):
    """Abstract base class for audio playback strategies."""

    @abstractmethod
    def initialize(self):
        """Initialize the audio system."""
        pass

    @abstractmethod
    def play_artifact(self, artifact: AudioArtifact) -> None:
        """Start playing a recorded artifact without waiting for it to finish.

        Raises PlaybackError if the artifact cannot be decoded or played.
        """
        pass

    @abstractmethod
    def is_playing(self) -> bool:
        """Check if audio is currently playing."""
        pass

    @abstractmethod
    def stop_playback(self):
        """Stop the current playback."""
        pass

    @abstractmethod
    def set_volume(self, volume: float):
        """Set the volume level."""
        pass
