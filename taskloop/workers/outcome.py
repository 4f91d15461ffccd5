"""Classification of worker iteration results."""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from taskloop.workers.cancellation import CancellationToken, OperationCancelledError


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAULT = "fault"          # logged, default delay applies
    CANCELLED = "cancelled"  # graceful stop, loop re-checks the token


@dataclass(frozen=True)
class IterationOutcome:
    kind: OutcomeKind
    delay: Optional[float] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, delay: float) -> "IterationOutcome":
        return cls(OutcomeKind.SUCCESS, delay=delay)

    @classmethod
    def fault(cls, error: BaseException) -> "IterationOutcome":
        return cls(OutcomeKind.FAULT, error=error)

    @classmethod
    def cancelled(cls) -> "IterationOutcome":
        return cls(OutcomeKind.CANCELLED)


def is_cancellation_shaped(error: BaseException) -> bool:
    return isinstance(error, (OperationCancelledError, asyncio.CancelledError))


def classify_failure(error: BaseException, cancellation: CancellationToken) -> IterationOutcome:
    """
    A cancellation-shaped failure counts as a graceful stop only while the
    loop's own token is cancelled; anything else is a fault.
    """
    if is_cancellation_shaped(error) and cancellation.is_cancellation_requested:
        return IterationOutcome.cancelled()
    return IterationOutcome.fault(error)
