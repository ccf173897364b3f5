from __future__ import annotations

"""
Time window resolution for the monitor endpoints.

Clients send the time of their last poll as epoch seconds. The window is
never wider than `max_age` seconds: older timestamps are pulled forward to
`now - max_age` instead of being rejected.
"""

import time as _time
from typing import Optional

from tracker.core.errors import InvalidParameter, MissingParameter

DEFAULT_WINDOW_SECONDS = 4 * 60 * 60


def resolve_time_window(
    raw: Optional[str],
    now: Optional[float] = None,
    *,
    max_age: int = DEFAULT_WINDOW_SECONDS,
) -> int:
    """
    Turn the raw `time` query parameter into an inclusive lower bound.

    Args:
        raw: Query parameter value as received (string or None).
        now: Current epoch seconds; defaults to the wall clock.
        max_age: Widest allowed window in seconds.

    Returns:
        Epoch seconds to be used as `time >= bound`.

    Raises:
        MissingParameter: `raw` is absent or blank.
        InvalidParameter: `raw` is not a number.
    """
    if raw is None or not str(raw).strip():
        raise MissingParameter("Time parameter required.")

    try:
        since = int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        raise InvalidParameter("Time parameter must be epoch seconds.")

    if now is None:
        now = _time.time()
    floor = int(now) - max_age

    # 0 asks for the default window
    if since == 0:
        return floor

    if int(now) - since > max_age:
        return floor
    return since
