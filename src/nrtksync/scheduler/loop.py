"""Repeat loop for long-running syncs.

Runs a job, sleeps for a fixed interval, and repeats until told to stop.
The stop signal is a ``threading.Event`` so a signal handler (or a test)
can end the loop between attempts or during a sleep.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from nrtksync.core.exceptions import NrtkSyncError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class RepeatLoop(Generic[R]):
    """Fixed-interval scheduling loop.

    Fatal errors from one attempt are logged and do not affect the next:
    there is no backoff and no retry budget.

    Example:
        >>> import threading
        >>> from nrtksync.scheduler.loop import RepeatLoop
        >>> stop = threading.Event()
        >>> calls = []
        >>> def job():
        ...     calls.append(1)
        ...     if len(calls) == 3:
        ...         stop.set()
        >>> RepeatLoop(job, interval_ms=1, stop=stop).run()
        3
    """

    def __init__(
        self,
        job: Callable[[], R],
        interval_ms: int,
        stop: threading.Event | None = None,
    ) -> None:
        """Initialize the loop.

        Args:
            job: One sync attempt.
            interval_ms: Sleep between attempts, in milliseconds.
            stop: Event that ends the loop when set.
        """
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self._job = job
        self._interval_ms = interval_ms
        self._stop = stop or threading.Event()
        self.run_count = 0
        self.failure_count = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval_ms / 1000

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    def stop(self) -> None:
        """Ask the loop to finish after the current attempt."""
        self._stop.set()

    def run_once(self) -> R:
        """Run the job a single time, propagating errors."""
        self.run_count += 1
        return self._job()

    def run(self) -> int:
        """Run until the stop event is set.

        Returns:
            Number of attempts made.
        """
        while not self._stop.is_set():
            try:
                self.run_once()
            except NrtkSyncError as e:
                self.failure_count += 1
                logger.error("Sync failed: %s", e)

            if self._stop.is_set():
                break
            logger.info("Sleeping for %s seconds", self.interval_seconds)
            self._stop.wait(self.interval_seconds)

        return self.run_count
