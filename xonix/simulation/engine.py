"""Game — drives a Level at a fixed cadence.

The Game owns the tick schedule and forwards elapsed real time to the
level's clock.  Each tick runs in the same order:

1. Update entities (player first, then enemies)
2. Hand the level to the output sink for drawing
3. Notify ``on_update`` subscribers (HUD refresh)

Movement always uses ``LOGICAL_STEP``, never the real elapsed time, so
entity speed is measured in cells per tick and the tick rate alone sets
the pace of the game.
"""

from __future__ import annotations

import logging
from typing import Protocol

from xonix.level.events import Signal
from xonix.level.level import Level
from xonix.level.timer import Interval

logger = logging.getLogger(__name__)

LOGICAL_STEP = 1.0


class OutputSink(Protocol):
    """Anything that can present a level after each tick."""

    def draw(self, level: Level) -> None: ...


class Game:
    """Start/pause/stop control and the tick loop for one level at a time.

    Attributes:
        level: The level being played (an empty placeholder when stopped).
        sink: Where each tick's result is drawn.
        update_interval: Seconds between two ticks.
        on_update: Published after every tick.
    """

    def __init__(self, sink: OutputSink | None = None, fps: float = 30.0) -> None:
        self.level = Level.empty()
        self.sink = sink
        self.update_interval = 0.0
        self.on_update = Signal("update")
        self._next_update: Interval | None = None
        self._paused = False
        self.set_update_interval_from_fps(fps)

    def set_update_interval_from_fps(self, fps: float) -> None:
        if fps <= 0:
            msg = f"fps must be positive, got {fps}"
            raise ValueError(msg)
        self.update_interval = 1.0 / fps

    def is_running(self) -> bool:
        return self._next_update is not None

    def is_paused(self) -> bool:
        return self._paused

    def is_stopped(self) -> bool:
        return not self.is_running() and not self.is_paused()

    def start(self, level: Level) -> None:
        """Replace any current level with ``level`` and start playing it.

        Raises:
            RuntimeError: If no output sink is configured.
        """
        if not self.is_stopped():
            self.stop()

        self._require_sink()
        self.level = level
        level.start_timer()
        logger.info(
            "Starting %dx%d level with %d enemies",
            level.field.width,
            level.field.height,
            len(level.enemies),
        )
        self.run()

    def run(self) -> None:
        """Schedule the tick loop and run the first tick immediately."""
        self._paused = False
        self._cancel_schedule()
        self._next_update = Interval(period=self.update_interval, callback=self.tick)
        self.tick()

    def pause(self) -> None:
        """Freeze the tick loop and the level clock."""
        self.level.timer.pause()
        self._cancel_schedule()
        self._paused = True
        logger.info("Game paused")

    def resume(self) -> None:
        """Unfreeze the clock and restart the tick loop."""
        self.level.timer.resume()
        logger.info("Game resumed")
        self.run()

    def stop(self) -> None:
        """Cancel all schedules and discard the level."""
        self.level.timer.stop()
        self._cancel_schedule()
        self._paused = False
        self.level = Level.empty()
        logger.info("Game stopped")

    def advance(self, dt: float) -> None:
        """Feed ``dt`` seconds of real time to the tick and clock schedules."""
        if self._next_update is not None:
            self._next_update.advance(dt)
        self.level.timer.advance(dt)

    def tick(self) -> None:
        """Run one simulation step and draw the result.

        Raises:
            RuntimeError: If no output sink is configured.
        """
        sink = self._require_sink()
        level = self.level
        level.update(LOGICAL_STEP)
        sink.draw(level)
        self.on_update.publish()

    def steer(self, dx: int, dy: int) -> None:
        """Point the player in direction ``(dx, dy)`` at unit speed."""
        player = self.level.player
        player.direction.set(dx, dy)
        player.speed = 1.0

    def _require_sink(self) -> OutputSink:
        if self.sink is None:
            msg = "No output sink configured"
            raise RuntimeError(msg)
        return self.sink

    def _cancel_schedule(self) -> None:
        if self._next_update is not None:
            self._next_update.cancel()
        self._next_update = None
