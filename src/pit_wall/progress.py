"""Progress tracking for unit-counted jobs.

A ``Progress`` holds a title, the total number of work units and a counter
of units done. On demand it works out the elapsed time, the percentage
complete and a linear estimate of the time left, and renders them as one
line of text. It does no I/O of its own; callers decide when to show it.

Instances are not thread-safe. Guard them with a lock if several threads
report work on the same tracker.
"""

import logging
import sys
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

from .utils.duration import format_duration

# Configure logging
logger = logging.getLogger(__name__)

DONE_LABEL = "done!"
UNKNOWN_LABEL = "unknown"

MAX_SECONDS = timedelta.max.total_seconds()

Clock = Callable[[], float]


@dataclass(frozen=True)
class ProgressSnapshot:
    """Values computed from a single clock reading."""
    title: str
    work_done: int
    total_work: int
    elapsed: timedelta
    percent: float
    eta: Optional[timedelta]
    done: bool

    def __str__(self) -> str:
        if self.done:
            eta = DONE_LABEL
        elif self.eta is None:
            eta = UNKNOWN_LABEL
        else:
            eta = format_duration(self.eta)

        return (f"{self.title} {self.work_done}/{self.total_work} - "
                f"{self.percent:.1f}% started {format_duration(self.elapsed)} ago, "
                f"eta: {eta}")


class Progress:
    """Tracks the work done for a job and estimates the time left."""

    def __init__(
        self,
        title: str,
        total_work: int,
        *,
        clock: Optional[Clock] = None,
        started_at: Optional[float] = None
    ):
        """Initialize progress tracker.

        Args:
            title: Label identifying the job being tracked
            total_work: Units of work needed to reach 100%
            clock: Source of the current instant in seconds, defaults to
                time.monotonic
            started_at: Clock reading the job started at, defaults to now.
                Readings from time.monotonic only mean something within one
                process, so pass clock=time.time when started_at is stored
                and restored later.
        """
        self._title = title
        self._total_work = total_work
        self._clock = clock or time.monotonic
        self._started_at = self._clock() if started_at is None else started_at
        self.work_done = 0

    @property
    def title(self) -> str:
        return self._title

    @property
    def total_work(self) -> int:
        return self._total_work

    @property
    def started_at(self) -> float:
        return self._started_at

    def increment_work_done(self) -> None:
        """Increment work done by one unit."""
        self._advance(1)

    def increment_work_done_by(self, amount: int) -> None:
        """Increment work done by a given amount.

        Args:
            amount: Units of work finished since the last report
        """
        if amount < 0:
            logger.warning(
                f"Ignoring negative increment of {amount} for '{self._title}'"
            )
            return
        self._advance(amount)

    def set_work_done(self, units: int) -> None:
        """Move the work done counter forward to an absolute value.

        Args:
            units: Total units finished so far
        """
        if units < self.work_done:
            logger.warning(
                f"Ignoring work done of {units} for '{self._title}', "
                f"already at {self.work_done}"
            )
            return
        self._advance(units - self.work_done)

    def _advance(self, amount: int) -> None:
        previous = self.work_done
        self.work_done = previous + amount

        if previous <= self._total_work < self.work_done:
            logger.warning(
                f"Work done for '{self._title}' ({self.work_done}) is larger than "
                f"work total ({self._total_work}), reporting the job as done"
            )

    def is_done(self) -> bool:
        """Whether at least the total work has been reported."""
        return self.work_done > 0 and self.work_done >= self._total_work

    def elapsed_time(self) -> timedelta:
        """Time since the job started."""
        return self._elapsed(self._clock())

    def percent_complete(self) -> float:
        """Percentage of the total work done.

        A job with no total work reports 0.0. Counts too large for a float
        report sys.float_info.max.
        """
        if self._total_work == 0:
            return 0.0
        try:
            return min(self.work_done / self._total_work * 100, sys.float_info.max)
        except OverflowError:
            return sys.float_info.max

    def eta(self) -> Optional[timedelta]:
        """Estimate the time left by linear extrapolation.

        Returns:
            Estimated remaining time, timedelta(0) once the total is reached,
            or None when no work has been reported yet
        """
        return self._estimate(self.elapsed_time())

    def snapshot(self) -> ProgressSnapshot:
        """Compute every reader against the same instant."""
        elapsed = self.elapsed_time()
        return ProgressSnapshot(
            title=self._title,
            work_done=self.work_done,
            total_work=self._total_work,
            elapsed=elapsed,
            percent=self.percent_complete(),
            eta=self._estimate(elapsed),
            done=self.is_done(),
        )

    def progress_string(self) -> str:
        """Summarize the current progress on one line.

        Something like ``job name 2/100 - 2.0% started 2s ago, eta: 98s``.
        Log it periodically with whatever logging you have set up.
        """
        return str(self.snapshot())

    def _elapsed(self, now: float) -> timedelta:
        return timedelta(seconds=max(0.0, now - self._started_at))

    def _estimate(self, elapsed: timedelta) -> Optional[timedelta]:
        if self.work_done == 0:
            return None

        work_not_done = max(0, self._total_work - self.work_done)
        try:
            not_done_to_done_ratio = work_not_done / self.work_done
            eta_seconds = elapsed.total_seconds() * not_done_to_done_ratio
        except OverflowError:
            return timedelta.max

        # Anything past timedelta.max is reported as timedelta.max
        if eta_seconds >= MAX_SECONDS:
            return timedelta.max
        return timedelta(seconds=eta_seconds)

    def __str__(self) -> str:
        return self.progress_string()

    def __repr__(self) -> str:
        return (f"Progress(title={self._title!r}, work_done={self.work_done}, "
                f"total_work={self._total_work})")
