"""taskloop: run a unit of work repeatedly until cancelled."""

from taskloop.workers import (
    CancellationToken,
    FunctionWorker,
    OperationCancelledError,
    Worker,
    WorkerState,
    start_worker,
)

__all__ = [
    "CancellationToken",
    "FunctionWorker",
    "OperationCancelledError",
    "Worker",
    "WorkerState",
    "start_worker",
]
