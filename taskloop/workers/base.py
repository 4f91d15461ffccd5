"""
Recurring Worker Loop.

Runs a caller-supplied iteration over and over until a CancellationToken is
cancelled. Each successful iteration returns how long to wait before the next
one; a failed iteration is logged and followed by a fixed default delay.
Iteration failures never reach the caller of run().
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Awaitable, Callable, Optional

from taskloop.core.config import get_settings
from taskloop.core.logging import get_logger, iteration_ctx, worker_name_ctx
from taskloop.workers.cancellation import CancellationToken
from taskloop.workers.delay import Delay, to_seconds, wait_for_delay
from taskloop.workers.outcome import IterationOutcome, OutcomeKind, classify_failure

logger = get_logger(__name__)


class WorkerState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"   # also the state before run() is first called


class Worker(ABC):
    """
    Base class for recurring workers.

    Subclasses implement run_iteration(). setup() and teardown() are no-ops
    that run() never calls; callers that need them invoke them around run().

    state is STOPPED until run() starts and again once it returns.

    One instance drives one loop at a time. Running the same instance in two
    concurrent loops is a caller error and is not guarded against.
    """

    def __init__(self, name: Optional[str] = None, logger: Optional[logging.Logger] = None):
        self.name = name or type(self).__name__
        self.logger = logger or get_logger(__name__)
        self.state = WorkerState.STOPPED

    @abstractmethod
    async def run_iteration(self, cancellation: CancellationToken) -> Delay:
        """
        Runs one iteration.

        Returns:
            How long to wait before the next iteration.
        """

    async def setup(self, cancellation: CancellationToken) -> None:
        return None

    async def teardown(self, cancellation: CancellationToken) -> None:
        return None

    async def run(self, default_delay: Delay, cancellation: CancellationToken) -> None:
        """
        Runs the worker until cancellation is requested.

        Args:
            default_delay: Wait applied after an iteration fails.
            cancellation: Token observed before each iteration and during waits.

        Raises:
            ValueError: If default_delay is not a valid delay.
        """
        default_seconds = to_seconds(default_delay)
        name_token = worker_name_ctx.set(self.name)
        try:
            self.state = WorkerState.RUNNING
            self.logger.info(f"Worker {self.name} started")

            iteration = 0
            while not cancellation.is_cancellation_requested:
                iteration += 1
                outcome = await self._execute_iteration(iteration, cancellation)

                if outcome.kind is OutcomeKind.SUCCESS:
                    await wait_for_delay(outcome.delay, cancellation)
                elif outcome.kind is OutcomeKind.FAULT:
                    self._log_fault(iteration, outcome.error)
                    await wait_for_delay(default_seconds, cancellation)
                # CANCELLED: the token check at the top of the loop stops it

            self.state = WorkerState.STOPPED
            self.logger.info(f"Worker {self.name} stopped")
        finally:
            self.state = WorkerState.STOPPED
            worker_name_ctx.reset(name_token)

    async def _execute_iteration(self, iteration: int, cancellation: CancellationToken) -> IterationOutcome:
        iteration_token = iteration_ctx.set(iteration)
        try:
            delay = await self.run_iteration(cancellation)
            return IterationOutcome.success(to_seconds(delay))
        except asyncio.CancelledError as e:
            # Cancellation of the task hosting this loop is not ours to classify
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return classify_failure(e, cancellation)
        except Exception as e:
            return classify_failure(e, cancellation)
        finally:
            iteration_ctx.reset(iteration_token)

    def _log_fault(self, iteration: int, error: BaseException) -> None:
        token = iteration_ctx.set(iteration)
        try:
            self.logger.error(
                f"Worker {self.name} iteration failed: {type(error).__name__}: {error}",
                exc_info=error,
            )
        finally:
            iteration_ctx.reset(token)


IterationFn = Callable[[CancellationToken], Awaitable[Delay]]
HookFn = Callable[[CancellationToken], Awaitable[None]]


class FunctionWorker(Worker):
    """Worker assembled from plain coroutine functions."""

    def __init__(
        self,
        iteration: IterationFn,
        setup: Optional[HookFn] = None,
        teardown: Optional[HookFn] = None,
        name: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(name=name or getattr(iteration, "__name__", None), logger=logger)
        self._iteration = iteration
        self._setup = setup
        self._teardown = teardown

    async def run_iteration(self, cancellation: CancellationToken) -> Delay:
        return await self._iteration(cancellation)

    async def setup(self, cancellation: CancellationToken) -> None:
        if self._setup is not None:
            await self._setup(cancellation)

    async def teardown(self, cancellation: CancellationToken) -> None:
        if self._teardown is not None:
            await self._teardown(cancellation)


def start_worker(
    worker: Worker,
    cancellation: CancellationToken,
    default_delay: Optional[Delay] = None,
) -> asyncio.Task:
    """
    Start worker.run() as a background task and return the task.

    When default_delay is omitted, WORKER_DEFAULT_DELAY_SECONDS from the
    settings is used.
    """
    if default_delay is None:
        default_delay = get_settings().worker_default_delay_seconds
    seconds = to_seconds(default_delay)
    task = asyncio.create_task(worker.run(seconds, cancellation), name=f"worker:{worker.name}")
    logger.debug(f"Worker {worker.name} scheduled (default_delay={seconds}s)")
    return task
