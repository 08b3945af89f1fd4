import unittest
from unittest.mock import MagicMock

import numpy as np

from voice_alarm.audio.recorder import AudioRecorder, RecorderConfig
from voice_alarm.errors import CaptureError


class TestAudioRecorder(unittest.TestCase):
    """Tests für die Aufnahme mit einem gefälschten Input-Stream."""

    def setUp(self):
        self.stream = MagicMock()
        self.stream_factory = MagicMock(return_value=self.stream)
        self.config = RecorderConfig(samplerate=8000, channels=1, block_duration=0.05)
        self.recorder = AudioRecorder(config=self.config, stream_factory=self.stream_factory)

    def _feed(self, blocks: int, frames: int = 400):
        for i in range(blocks):
            block = np.full((frames, 1), i, dtype=np.int16)
            self.recorder.audio_callback(block, frames, None, None)

    def test_record_produces_wav_artifact(self):
        self.recorder.start()
        self.assertTrue(self.recorder.is_recording)
        self.stream_factory.assert_called_once_with(self.config, self.recorder.audio_callback)

        self._feed(3)
        artifact = self.recorder.stop()

        self.assertFalse(self.recorder.is_recording)
        self.stream.stop.assert_called_once()
        self.stream.close.assert_called_once()
        self.assertEqual(artifact.mime_type, "audio/wav")
        self.assertEqual(artifact.sample_rate, 8000)
        self.assertTrue(artifact.data.startswith(b"RIFF"))
        self.assertAlmostEqual(artifact.duration_seconds, 3 * 400 / 8000)

    def test_start_twice(self):
        self.recorder.start()
        with self.assertRaises(CaptureError):
            self.recorder.start()

    def test_stop_without_start(self):
        with self.assertRaises(CaptureError):
            self.recorder.stop()

    def test_empty_recording(self):
        self.recorder.start()
        with self.assertRaises(CaptureError):
            self.recorder.stop()
        self.stream.close.assert_called_once()

    def test_device_failure_leaves_recorder_idle(self):
        self.stream_factory.side_effect = CaptureError("Permission denied")

        with self.assertRaises(CaptureError):
            self.recorder.start()
        self.assertFalse(self.recorder.is_recording)

    def test_blocks_after_stop_are_ignored(self):
        self.recorder.start()
        self._feed(2)
        self.recorder.stop()

        self._feed(5)
        self.recorder.start()
        self._feed(1)
        artifact = self.recorder.stop()

        self.assertAlmostEqual(artifact.duration_seconds, 400 / 8000)


if __name__ == "__main__":
    unittest.main()
