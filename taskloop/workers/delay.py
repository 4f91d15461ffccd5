"""Interruptible waits between worker iterations."""
import asyncio
import math
from datetime import timedelta
from typing import Union

from taskloop.workers.cancellation import CancellationToken

Delay = Union[timedelta, int, float]


def to_seconds(delay: Delay) -> float:
    """
    Normalise a delay to seconds.

    Raises:
        ValueError: If the delay is not a duration, is negative or is NaN.
    """
    if isinstance(delay, timedelta):
        seconds = delay.total_seconds()
    elif isinstance(delay, (int, float)) and not isinstance(delay, bool):
        try:
            seconds = float(delay)
        except OverflowError:
            # Integers beyond float range: unbounded wait, sign preserved
            seconds = math.inf if delay > 0 else -math.inf
    else:
        raise ValueError(f"Delay must be a timedelta or a number of seconds, got {delay!r}")

    if math.isnan(seconds) or seconds < 0:
        raise ValueError(f"Delay must be non-negative, got {delay!r}")
    return seconds


async def wait_for_delay(delay: Delay, cancellation: CancellationToken) -> bool:
    """
    Wait for ``delay`` or until cancellation is requested, whichever comes first.

    A zero delay still yields to the event loop once.

    Returns:
        True if cancellation was observed.
    """
    seconds = to_seconds(delay)
    if seconds == 0:
        await asyncio.sleep(0)
        return cancellation.is_cancellation_requested
    return await cancellation.wait(seconds)
