import unittest
from unittest.mock import patch

from pydub.exceptions import CouldntDecodeError

from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.audio.strategy.pygame_audio_strategy import PygameAudioStrategy
from voice_alarm.errors import PlaybackError


class _FakePygameError(Exception):
    pass


class TestPygameAudioStrategy(unittest.TestCase):
    def setUp(self):
        self.pygame_patch = patch("voice_alarm.audio.strategy.pygame_audio_strategy.pygame")
        self.segment_patch = patch(
            "voice_alarm.audio.strategy.pygame_audio_strategy.AudioSegment"
        )
        self.pygame_mock = self.pygame_patch.start()
        self.segment_mock = self.segment_patch.start()
        self.pygame_mock.error = _FakePygameError
        self.pygame_mock.mixer.get_init.return_value = (44100, -16, 2)

        self.strategy = PygameAudioStrategy()
        self.artifact = AudioArtifact(data=b"RIFF....WAVE", mime_type="audio/wav")

    def tearDown(self):
        self.pygame_patch.stop()
        self.segment_patch.stop()

    def test_initialize_only_once(self):
        self.strategy.initialize()
        self.pygame_mock.mixer.init.assert_not_called()

        self.pygame_mock.mixer.get_init.return_value = None
        self.strategy.initialize()
        self.pygame_mock.mixer.init.assert_called_once()

    def test_play_does_not_wait_for_completion(self):
        sound = self.pygame_mock.mixer.Sound.return_value
        self.strategy.set_volume(0.4)

        self.strategy.play_artifact(self.artifact)

        self.segment_mock.from_file.assert_called_once()
        self.assertEqual(self.segment_mock.from_file.call_args.kwargs["format"], "wav")
        sound.set_volume.assert_called_once_with(0.4)
        sound.play.assert_called_once()
        self.pygame_mock.time.wait.assert_not_called()

    def test_undecodable_artifact(self):
        self.segment_mock.from_file.side_effect = CouldntDecodeError("nope")

        with self.assertRaises(PlaybackError):
            self.strategy.play_artifact(self.artifact)

    def test_pygame_error_is_wrapped(self):
        self.pygame_mock.mixer.Sound.side_effect = _FakePygameError("no device")

        with self.assertRaises(PlaybackError):
            self.strategy.play_artifact(self.artifact)

    def test_initialize_without_audio_device(self):
        self.pygame_mock.mixer.get_init.return_value = None
        self.pygame_mock.mixer.init.side_effect = _FakePygameError("no device")

        with self.assertLogs("PygameAudioStrategy", level="ERROR"):
            self.strategy.initialize()

    def test_mixer_not_initialized(self):
        self.pygame_mock.mixer.get_init.return_value = None

        with self.assertRaises(PlaybackError):
            self.strategy.play_artifact(self.artifact)
        self.assertFalse(self.strategy.is_playing())


if __name__ == "__main__":
    unittest.main()
