"""Recurring worker loop."""

from taskloop.workers.base import FunctionWorker, Worker, WorkerState, start_worker
from taskloop.workers.cancellation import CancellationToken, OperationCancelledError
from taskloop.workers.delay import Delay, to_seconds, wait_for_delay
from taskloop.workers.outcome import (
    IterationOutcome,
    OutcomeKind,
    classify_failure,
    is_cancellation_shaped,
)

__all__ = [
    # Loop
    "Worker",
    "FunctionWorker",
    "WorkerState",
    "start_worker",

    # Cancellation
    "CancellationToken",
    "OperationCancelledError",

    # Delays
    "Delay",
    "to_seconds",
    "wait_for_delay",

    # Outcomes
    "IterationOutcome",
    "OutcomeKind",
    "classify_failure",
    "is_cancellation_shaped",
]
