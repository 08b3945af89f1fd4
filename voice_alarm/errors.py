"""Shared error types for voice_alarm.

Unknown alarm ids are not errors: alarms may legitimately have fired already.
"""


class VoiceAlarmError(Exception):
    """Base error for voice_alarm."""


class InvalidInputError(VoiceAlarmError, ValueError):
    """Missing recording or malformed time of day; nothing was changed."""


class CaptureError(VoiceAlarmError):
    """Microphone could not be opened or the recording is unusable."""


class PlaybackError(VoiceAlarmError):
    """The playback backend failed to decode or play an artifact."""
