import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("VOICE_ALARM_LOG_LEVEL", "INFO")

# Aufnahme
SAMPLE_RATE = int(os.getenv("VOICE_ALARM_SAMPLE_RATE", "16000"))
CHANNELS = int(os.getenv("VOICE_ALARM_CHANNELS", "1"))
BLOCK_DURATION_S = 0.05  # 50ms
MIN_RECORDING_BLOCKS = int(os.getenv("VOICE_ALARM_MIN_RECORDING_BLOCKS", "1"))

# Wiedergabe
DEFAULT_VOLUME = float(os.getenv("VOICE_ALARM_VOLUME", "0.65"))

DEFAULT_MIME_TYPE = "audio/wav"

ONE_DAY_SECONDS = 24 * 60 * 60
