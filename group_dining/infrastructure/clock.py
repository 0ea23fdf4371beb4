from datetime import datetime
from typing import Callable

import pytz

from group_dining.core.config import settings

Clock = Callable[[], datetime]


def make_clock(timezone_name: str | None = None) -> Clock:
    """Zero-argument callable returning the current time in the configured zone."""
    tz = pytz.timezone(timezone_name or settings.TIMEZONE)

    def now() -> datetime:
        return datetime.now(tz)

    return now
