"""
Cooperative cancellation for worker loops.

A CancellationToken is created by the caller, handed to Worker.run() and
passed on to every iteration. The loop reads it before each iteration and
while waiting between iterations; iterations may read it too.

Not thread-safe: cancel() must be called from the event loop the token is
awaited on (use loop.call_soon_threadsafe(token.cancel) from other threads).
"""
import asyncio
import math
from typing import Optional


class OperationCancelledError(Exception):
    """Raised by an operation that stopped because cancellation was requested."""
    pass


class CancellationToken:
    """Flag indicating that a stop was requested."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    def raise_if_cancellation_requested(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Cancellation requested")

    async def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until cancellation is requested or ``timeout`` seconds elapse.

        Args:
            timeout: Seconds to wait. None or infinity waits for cancellation only.

        Returns:
            True if cancellation was requested, False if the timeout elapsed first.
        """
        if self._event.is_set():
            return True
        if timeout is not None and math.isinf(timeout):
            timeout = None
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancellation_requested})"
