"""Shared fixtures for the Xonix test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from xonix.field.field import Field
from xonix.level.builder import LevelBuilder
from xonix.level.events import Signal
from xonix.level.level import Level


class RecordingSink:
    """Output sink that remembers every level it was asked to draw."""

    def __init__(self) -> None:
        self.frames: list[Level] = []

    def draw(self, level: Level) -> None:
        self.frames.append(level)


class EventLog:
    """Counts how often each subscribed signal fired."""

    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def watch(self, signal: Signal, name: str) -> None:
        self.counts.setdefault(name, 0)

        def _record() -> None:
            self.counts[name] += 1

        signal.subscribe(_record)

    def __getitem__(self, name: str) -> int:
        return self.counts.get(name, 0)


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def bordered_field() -> Field:
    """A 5x5 field with a 1-wide claimed border (3x3 unclaimed interior)."""
    return LevelBuilder().resize(5, 5).claim_border(1).build().field


@pytest.fixture
def small_level() -> Level:
    """5x5 bordered level, player spawning on the top border, one enemy.

    The enemy sits still at (3, 3) so tests control every movement.
    """
    level = (
        LevelBuilder()
        .resize(5, 5)
        .claim_border(1)
        .set_default_player_position(2, 0)
        .add_enemy(3, 3)
        .build()
    )
    level.enemies[0].speed = 0.0
    return level


@pytest.fixture
def events(small_level: Level) -> EventLog:
    """Counters for the small level's win/die/lose signals."""
    log = EventLog()
    log.watch(small_level.on_win, "win")
    log.watch(small_level.on_die, "die")
    log.watch(small_level.on_lose, "lose")
    return log


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
