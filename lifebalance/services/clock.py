"""Clock — the single place services read the current time from.

Design Decisions:
    - Services take a Clock callable so tests pin "today" without patching datetime
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
