import datetime
from typing import Callable

Clock = Callable[[], datetime.datetime]


class SystemClock:
    """Wall-clock Zeitquelle (lokale Zeit, ohne Zeitzone)."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now()

    def __call__(self) -> datetime.datetime:
        return self.now()


def format_clock(moment: datetime.datetime) -> str:
    """Aktuelle Uhrzeit für die Anzeige, z.B. '07:05:09'."""
    return moment.strftime("%H:%M:%S")


def format_time_of_day(time_of_day: datetime.time) -> str:
    return time_of_day.strftime("%H:%M")
