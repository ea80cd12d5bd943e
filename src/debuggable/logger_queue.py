"""
Execution queues for dispatching log work.

The dispatcher never runs a sink's render step itself. It hands each unit
of work to a LoggerQueue, which decides when and where it runs:

    ImmediateLoggerQueue   - runs work on the calling thread
    ThreadPoolLoggerQueue  - runs work on a thread pool (default)

Any object with a compatible ``async_`` method can be injected instead,
which is how tests count submissions without running anything.

Work is never cancelled once submitted.
"""

import sys
import threading
import traceback
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum, Flag, auto
from typing import Callable, List, Optional, Protocol


class QoS(Enum):
    """Priority class hint for submitted work."""
    USER_INTERACTIVE = auto()
    USER_INITIATED = auto()
    DEFAULT = auto()
    UTILITY = auto()
    BACKGROUND = auto()
    UNSPECIFIED = auto()


class WorkFlags(Flag):
    """Options controlling how a unit of work runs."""
    NONE = 0
    BARRIER = auto()     # Waits for earlier work; later work waits for it
    DETACHED = auto()    # Independent of the submitter's context


class WorkGroup:
    """Joint completion tracking for several units of work.

    Usage::

        group = WorkGroup()
        queue.async_(work, group=group)
        group.wait(timeout=1.0)
    """

    def __init__(self):
        self._pending = 0
        self._cond = threading.Condition()

    def enter(self) -> None:
        with self._cond:
            self._pending += 1

    def leave(self) -> None:
        with self._cond:
            if self._pending <= 0:
                raise ValueError("WorkGroup.leave() called more times than enter()")
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every entered unit has left.

        Returns:
            True if the group drained, False on timeout.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending


class LoggerQueue(Protocol):
    """Anything that can schedule a zero-argument callable."""

    def async_(self, work: Callable[[], None], group: Optional[WorkGroup] = None,
               qos: QoS = QoS.DEFAULT,
               flags: WorkFlags = WorkFlags.NONE) -> None:
        ...


def _run_in_group(work: Callable[[], None], group: Optional[WorkGroup]) -> None:
    try:
        work()
    finally:
        if group is not None:
            group.leave()


class ImmediateLoggerQueue:
    """Runs each unit of work synchronously on the submitting thread.

    Deterministic ordering; useful for tests and single-threaded tools.
    Exceptions raised by the work propagate to the submitter.
    """

    def async_(self, work, group=None, qos=QoS.DEFAULT, flags=WorkFlags.NONE):
        if group is not None:
            group.enter()
        _run_in_group(work, group)


class ThreadPoolLoggerQueue:
    """Concurrent queue backed by a ThreadPoolExecutor.

    Units of work run in parallel with each other and with the caller.
    BARRIER work waits for everything submitted before it, and work
    submitted after a barrier waits for the barrier.

    Exceptions raised by work, and submissions refused after shutdown(),
    are reported to stderr; they never reach the code that submitted
    the work.
    """

    def __init__(self, max_workers: Optional[int] = None,
                 thread_name_prefix: str = 'debuggable'):
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix=thread_name_prefix)
        self._lock = threading.Lock()
        self._pending: List[Future] = []
        self._barrier: Optional[Future] = None

    def async_(self, work, group=None, qos=QoS.DEFAULT, flags=WorkFlags.NONE):
        """Schedule `work`. Never raises; a refused submit is reported to stderr."""
        if group is not None:
            group.enter()
        with self._lock:
            self._pending = [f for f in self._pending if not f.done()]
            try:
                if flags & WorkFlags.BARRIER:
                    before = list(self._pending)
                    future = self._executor.submit(self._run_barrier, work, group, before)
                    self._barrier = future
                else:
                    barrier = self._barrier
                    if barrier is not None and barrier.done():
                        barrier = self._barrier = None
                    future = self._executor.submit(self._run, work, group, barrier)
            except RuntimeError as e:
                # Executor already shut down
                if group is not None:
                    group.leave()
                _print_exception("debuggable: log work was not scheduled:", e)
                return
            self._pending.append(future)
        future.add_done_callback(_report_failure)

    @staticmethod
    def _run(work, group, barrier):
        if barrier is not None:
            wait([barrier])
        _run_in_group(work, group)

    @staticmethod
    def _run_barrier(work, group, before):
        wait(before)
        _run_in_group(work, group)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for queued work to finish."""
        self._executor.shutdown(wait=wait)


def _print_exception(message: str, exc: BaseException) -> None:
    print(message, file=sys.stderr)
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def _report_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        _print_exception("debuggable: log work raised an exception:", exc)


# =============================================================================
# Process-wide default queue
# =============================================================================

_default_queue: Optional[ThreadPoolLoggerQueue] = None
_default_lock = threading.Lock()


def default_queue() -> ThreadPoolLoggerQueue:
    """Return the shared ThreadPoolLoggerQueue, creating it on first use."""
    global _default_queue
    with _default_lock:
        if _default_queue is None:
            _default_queue = ThreadPoolLoggerQueue()
        return _default_queue
