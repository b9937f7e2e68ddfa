from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional


def is_stale(
    last_updated_at: Optional[datetime],
    max_age: Optional[timedelta],
    now: datetime,
) -> bool:
    """Return True when loaded data must be refreshed before use.

    No max_age means data never expires once loaded; data that was never
    loaded is always stale.
    """
    if max_age is None:
        return False
    if last_updated_at is None:
        return True
    return last_updated_at + max_age < now
