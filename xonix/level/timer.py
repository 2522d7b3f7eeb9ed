"""Timer — the round clock, counting up or down in whole seconds.

The clock never reads wall-clock time itself.  Elapsed seconds are fed
in through ``advance`` and an ``Interval`` turns them into one ``tick``
per second.  Pausing gates ``tick`` but leaves the interval firing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto

from xonix.level.events import Signal

logger = logging.getLogger(__name__)


@dataclass
class Interval:
    """A repeating schedule driven by externally supplied elapsed time.

    Attributes:
        period: Seconds between two calls of ``callback``.
        callback: Function fired once per elapsed period.
        cancelled: Once True, ``advance`` fires nothing.
    """

    period: float
    callback: Callable[[], None]
    cancelled: bool = False
    _accumulator: float = field(default=0.0, repr=False)

    def advance(self, dt: float) -> int:
        """Accumulate ``dt`` seconds and fire once per full period.

        Returns:
            How many times the callback fired.
        """
        if self.cancelled or self.period <= 0:
            return 0
        self._accumulator += dt
        fired = 0
        while self._accumulator >= self.period and not self.cancelled:
            self._accumulator -= self.period
            self.callback()
            fired += 1
        return fired

    def cancel(self) -> None:
        self.cancelled = True


class TimerState(Enum):
    """Lifecycle of the round clock."""

    STOPPED = auto()
    RUNNING = auto()
    PAUSED = auto()


class Timer:
    """Count-up or count-down clock with pause/resume and a time-up signal.

    Attributes:
        seconds: Current clock value; may dip to -1 when a countdown
            expires.
        on_time_up: Published once when a countdown goes below zero.
    """

    def __init__(self) -> None:
        self.seconds = 0
        self.paused = False
        self.on_time_up = Signal("time_up")
        self._increment = 1
        self._countdown = False
        self._interval: Interval | None = None

    @property
    def state(self) -> TimerState:
        if self._interval is None:
            return TimerState.STOPPED
        if self.paused:
            return TimerState.PAUSED
        return TimerState.RUNNING

    def start(self, countdown: bool = False, start_seconds: int = 0) -> None:
        """Start counting from ``start_seconds``, or resume if paused.

        Args:
            countdown: Count down (True) or up (False).
            start_seconds: Initial clock value.
        """
        if self.state is TimerState.PAUSED:
            self.resume()
            return

        self.stop()
        self.seconds = start_seconds
        self._countdown = countdown
        self._increment = -1 if countdown else 1
        self._interval = Interval(period=1.0, callback=self.tick)
        logger.debug(
            "Timer started at %ds (%s)",
            start_seconds,
            "countdown" if countdown else "count-up",
        )

    def tick(self) -> None:
        """Advance the clock by one second unless paused or stopped."""
        if self.paused or self._interval is None:
            return

        self.seconds += self._increment
        if self._countdown and self.seconds < 0:
            logger.debug("Timer ran out")
            self.on_time_up.publish()
            self.pause()

    def advance(self, dt: float) -> None:
        """Feed ``dt`` elapsed seconds to the per-second schedule."""
        if self._interval is not None:
            self._interval.advance(dt)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def stop(self) -> None:
        """Cancel the schedule and reset the clock to zero."""
        if self._interval is not None:
            self._interval.cancel()
        self._interval = None
        self.seconds = 0
        self.paused = False

    def __str__(self) -> str:
        """Render as ``mm:ss``, never showing negative time."""
        minutes, seconds = divmod(max(0, self.seconds), 60)
        return f"{minutes:02d}:{seconds:02d}"
