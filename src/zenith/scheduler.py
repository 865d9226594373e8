"""
Cooperative periodic timers.

All callbacks run on the thread that calls ``run_pending``, one at a time and
each to completion. There is no preemption and no parallel execution.
"""

import logging
import time
from typing import Callable, List, Optional

from .utils.errors import error_boundary

logger = logging.getLogger(__name__)

# Callback return values
CONTINUE = True
STOP = False

TickCallback = Callable[[], Optional[bool]]


class Timer:
    """
    A registered periodic callback.

    Attributes:
        period: Seconds between runs
        callback: Called with no arguments; returning STOP deregisters it
        name: Label used in log messages
        deadline: Monotonic time of the next run
        active: False once cancelled or stopped
    """

    def __init__(self, period: float, callback: TickCallback, name: str, deadline: float):
        self.period = period
        self.callback = callback
        self.name = name
        self.deadline = deadline
        self.active = True
        self.runs = 0

    def __repr__(self) -> str:
        return f"<Timer(name={self.name}, period={self.period}, active={self.active})>"


class Scheduler:
    """
    Registry of fixed-period callbacks driven by the host loop.

    The host calls ``run_pending()`` whenever it wakes up and sleeps for at
    most ``time_until_next()`` in between.

    Example:
        >>> scheduler = Scheduler()
        >>> scheduler.every(1.0, clock.tick, name="clock")
        >>> while running:
        ...     scheduler.run_pending()
        ...     time.sleep(scheduler.time_until_next() or 0.25)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the scheduler.

        Args:
            clock: Monotonic time source (injectable for tests)
        """
        self.clock = clock
        self._timers: List[Timer] = []

    def every(self, period: float, callback: TickCallback, name: Optional[str] = None) -> Timer:
        """
        Register ``callback`` to run every ``period`` seconds.

        The first run is one period from now.

        Raises:
            ValueError: If period is not positive
        """
        if period <= 0:
            raise ValueError(f"Timer period must be positive, got {period}")

        name = name or getattr(callback, "__name__", "timer")
        timer = Timer(period, callback, name, self.clock() + period)
        self._timers.append(timer)
        logger.debug(f"Registered timer '{name}' every {period}s")
        return timer

    def cancel(self, timer: Timer) -> None:
        """Deregister ``timer``. Cancelling twice is harmless."""
        timer.active = False
        if timer in self._timers:
            self._timers.remove(timer)
            logger.debug(f"Cancelled timer '{timer.name}'")

    def run_pending(self, now: Optional[float] = None) -> int:
        """
        Run every timer whose deadline has passed, earliest first.

        Returns:
            Number of callbacks run
        """
        now = self.clock() if now is None else now
        due = sorted((t for t in self._timers if t.deadline <= now), key=lambda t: t.deadline)

        ran = 0
        for timer in due:
            if not timer.active:
                # Cancelled by a callback earlier in this pass
                continue

            result = self._run(timer)
            timer.runs += 1
            ran += 1

            if result is STOP:
                logger.debug(f"Timer '{timer.name}' stopped")
                self.cancel(timer)
                continue

            timer.deadline += timer.period
            if timer.deadline <= now:
                # Missed at least one whole period; do not burst to catch up
                timer.deadline = now + timer.period

        return ran

    def time_until_next(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds until the earliest deadline (0 if overdue), None with no timers."""
        if not self._timers:
            return None
        now = self.clock() if now is None else now
        return max(0.0, min(t.deadline for t in self._timers) - now)

    def clear(self) -> None:
        for timer in list(self._timers):
            self.cancel(timer)

    @property
    def timers(self) -> List[Timer]:
        return list(self._timers)

    def __len__(self) -> int:
        return len(self._timers)

    @staticmethod
    @error_boundary(default_return=CONTINUE)
    def _run(timer: Timer) -> Optional[bool]:
        return timer.callback()
