"""Reporting window calculation."""

from datetime import datetime, timezone
from typing import Optional

from openverse_automations.core.entities import WINDOW_LENGTH, TimeWindow


def compute_window(now: Optional[datetime] = None) -> TimeWindow:
    """
    Return the week ending today (UTC).

    Args:
        now: Reference time. Defaults to the current time; naive values
            are taken to be UTC.

    Returns:
        Window whose `end` is the UTC date of `now` and whose `start` is
        the UTC date seven days earlier.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    return TimeWindow(start=(now - WINDOW_LENGTH).date(), end=now.date())
