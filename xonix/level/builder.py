"""LevelBuilder — assemble a ready-to-run Level from plain parameters.

Every setter returns the builder so calls can be chained, and ``build``
validates the result before handing out a Level.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import TYPE_CHECKING

from xonix.entities.entity import Entity, EntityKind, Player
from xonix.entities.geometry import Vector
from xonix.field.cell import CellState
from xonix.field.field import Field
from xonix.level.level import Level

if TYPE_CHECKING:
    from xonix.simulation.config import GameConfig


class LevelBuilder:
    """Mutable recipe for a Level.

    Attributes:
        background: Background colour.
        unclaimed_color: Colour of UNCLAIMED cells.
        claimed_color: Colour of CLAIMED cells.
        claiming_color: Colour of CLAIMING cells.
    """

    def __init__(self) -> None:
        self.background = "#FFFFFF"
        self.unclaimed_color = "#000000"
        self.claimed_color = "#00000000"
        self.claiming_color = "#00FF00"
        self._field = Field(width=0, height=0)
        self._default_player_position = Vector()
        self._enemies: list[Entity] = []
        self._lives = 3
        self._claim_ratio_win = 0.8
        self._countdown_time: int | None = None

    @classmethod
    def from_config(cls, config: GameConfig) -> LevelBuilder:
        """Return a builder pre-filled from a GameConfig."""
        builder = (
            cls()
            .resize(config.field_width, config.field_height)
            .claim_border(config.border)
            .set_default_player_position(config.player_x, config.player_y)
            .set_player_lives(config.player_lives)
            .set_claim_ratio_win(config.claim_ratio_win)
            .set_countdown_time(config.countdown_time)
        )
        for x, y in config.enemies:
            builder.add_enemy(x, y)
        for x, y in config.destroyers:
            builder.add_destroyer(x, y)
        builder.background = config.background
        builder.unclaimed_color = config.unclaimed_color
        builder.claimed_color = config.claimed_color
        builder.claiming_color = config.claiming_color
        return builder

    def apply(self, configure: Callable[[LevelBuilder], object]) -> LevelBuilder:
        """Run ``configure(self)`` and return the builder."""
        configure(self)
        return self

    def resize(self, width: int, height: int) -> LevelBuilder:
        """Replace the field with a fresh, fully unclaimed one.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            msg = f"Field size must be positive, got {width}x{height}"
            raise ValueError(msg)
        self._field = Field(width=width, height=height)
        return self

    def claim_border(self, thickness: int) -> LevelBuilder:
        """Mark a ``thickness``-wide frame around the field as CLAIMED.

        Raises:
            ValueError: If ``thickness`` is negative.
        """
        if thickness < 0:
            msg = f"Border thickness must be >= 0, got {thickness}"
            raise ValueError(msg)
        field = self._field
        for y in range(field.height):
            for x in range(field.width):
                if (
                    x < thickness
                    or y < thickness
                    or x >= field.width - thickness
                    or y >= field.height - thickness
                ):
                    field.set(CellState.CLAIMED, x, y)
        return self

    def set_default_player_position(self, x: int, y: int) -> LevelBuilder:
        self._default_player_position = Vector(x, y)
        return self

    def set_player_lives(self, lives: int) -> LevelBuilder:
        if lives < 0:
            msg = f"Lives must be >= 0, got {lives}"
            raise ValueError(msg)
        self._lives = lives
        return self

    def set_claim_ratio_win(self, ratio: float) -> LevelBuilder:
        if not 0.0 < ratio <= 1.0:
            msg = f"Win ratio must be in (0, 1], got {ratio}"
            raise ValueError(msg)
        self._claim_ratio_win = ratio
        return self

    def set_countdown_time(self, seconds: int | None) -> LevelBuilder:
        """Set the countdown length; None makes the clock count up."""
        if seconds is not None and seconds < 0:
            msg = f"Countdown must be >= 0, got {seconds}"
            raise ValueError(msg)
        self._countdown_time = seconds
        return self

    def add_enemy(self, x: int, y: int) -> LevelBuilder:
        self._enemies.append(Entity.spawn(EntityKind.ENEMY, x, y))
        return self

    def add_destroyer(self, x: int, y: int) -> LevelBuilder:
        self._enemies.append(Entity.spawn(EntityKind.DESTROYER, x, y))
        return self

    def build(self) -> Level:
        """Validate the recipe and return a new, independent Level.

        The field and enemies are copied, so one builder can stamp out
        several levels that never share state.

        Raises:
            ValueError: If the spawn point or any enemy lies outside the
                field.
        """
        field = self._field
        spawn = self._default_player_position
        if not field.in_bounds(spawn.x_rounded, spawn.y_rounded):
            msg = f"Player spawn ({spawn.x}, {spawn.y}) is outside the field"
            raise ValueError(msg)
        for enemy in self._enemies:
            x, y = enemy.position.rounded
            if not field.in_bounds(x, y):
                msg = f"{enemy.kind.name.lower()} at ({x}, {y}) is outside the field"
                raise ValueError(msg)

        player = Player(lives=self._lives)
        player.position.set_from(spawn)
        return Level(
            field=copy.deepcopy(field),
            player=player,
            enemies=copy.deepcopy(self._enemies),
            background=self.background,
            unclaimed_color=self.unclaimed_color,
            claimed_color=self.claimed_color,
            claiming_color=self.claiming_color,
            claim_ratio_win=self._claim_ratio_win,
            default_player_position=Vector(spawn.x, spawn.y),
            countdown_time=self._countdown_time,
        )
