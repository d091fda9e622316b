"""Calendar-date clocks. Scheduling only ever looks at dates, never times."""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from lexicard.domain.constants import DEFAULT_TIMEZONE

Clock = Callable[[], date]


def zone_clock(timezone: str = DEFAULT_TIMEZONE) -> Clock:
    """A clock returning the current calendar date in ``timezone``."""
    zone = ZoneInfo(timezone)
    return lambda: datetime.now(zone).date()
