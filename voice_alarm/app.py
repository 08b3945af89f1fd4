import asyncio
from typing import Optional

from voice_alarm.alarm.alarm_observer import AlarmListLogger, AlarmObserver
from voice_alarm.alarm.registry import AlarmRegistry
from voice_alarm.alarm.scheduler import AlarmScheduler
from voice_alarm.audio.audio_artifact import AudioArtifact
from voice_alarm.audio.playback_trigger import PlaybackTrigger, get_playback_trigger
from voice_alarm.audio.recorder import AudioRecorder
from voice_alarm.clock import Clock
from voice_alarm.errors import CaptureError, InvalidInputError
from voice_alarm.util.logging_mixin import LoggingMixin


class VoiceAlarmApp(LoggingMixin):
    """Verbindet Aufnahme, Alarm-Registry und Wiedergabe zu einer Anwendung."""

    def __init__(
        self,
        recorder: Optional[AudioRecorder] = None,
        playback: Optional[PlaybackTrigger] = None,
        clock: Optional[Clock] = None,
        observer: Optional[AlarmObserver] = None,
    ):
        self.recorder = recorder or AudioRecorder()
        self.registry = AlarmRegistry(
            scheduler=AlarmScheduler(clock=clock),
            playback=playback or get_playback_trigger(),
        )
        self.registry.add_observer(observer or AlarmListLogger())
        self.current_artifact: Optional[AudioArtifact] = None

    def start_recording(self) -> None:
        self.recorder.start()

    def stop_recording(self) -> AudioArtifact:
        self.current_artifact = self.recorder.stop()
        self.logger.info(
            "🎙 Aufnahme bereit (%d Bytes, %.1f Sekunden)",
            len(self.current_artifact),
            self.current_artifact.duration_seconds or 0.0,
        )
        return self.current_artifact

    def submit(self, time_str: Optional[str]) -> str:
        """Legt aus der eingegebenen Uhrzeit und der letzten Aufnahme einen Alarm an."""
        if not time_str or self.current_artifact is None:
            raise InvalidInputError("Bitte Audio aufnehmen und eine Uhrzeit setzen.")

        alarm_id = self.registry.add(time_str, self.current_artifact)
        self.current_artifact = None
        return alarm_id

    def cancel(self, alarm_id: str) -> bool:
        return self.registry.cancel(alarm_id)

    def play(self, alarm_id: str) -> bool:
        return self.registry.play(alarm_id)

    def shutdown(self) -> None:
        if self.recorder.is_recording:
            try:
                self.recorder.stop()
            except CaptureError as e:
                self.logger.error("❌ Fehler beim Beenden der Aufnahme: %s", e)
        self.registry.shutdown()
        self.registry.playback.stop()


async def record_and_schedule(
    app: VoiceAlarmApp, time_str: str, record_seconds: float = 3.0
) -> str:
    """Nimmt `record_seconds` lang auf und plant die Aufnahme für `time_str`."""
    app.start_recording()
    await asyncio.sleep(record_seconds)
    app.stop_recording()
    return app.submit(time_str)


if __name__ == "__main__":

    async def _demo():
        app = VoiceAlarmApp()
        alarm_id = await record_and_schedule(app, "07:30")
        app.logger.info("Alarm %s gesetzt, warte auf Auslösung...", alarm_id)
        try:
            while app.registry.list_alarms():
                await asyncio.sleep(1)
            await asyncio.sleep(5)
        finally:
            app.shutdown()

    asyncio.run(_demo())
