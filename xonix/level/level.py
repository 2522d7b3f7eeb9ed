"""Level — one round of play.

A Level owns the Field, the Player, the enemies and the round Timer, and
turns what happens to them into outcomes:

1. The player touching its own trail, or an enemy touching the player
   or the trail, costs a life (``die``).
2. The player closing a trail claims territory (``claim``); crossing the
   win ratio wins the round.
3. Running out of lives, or out of time on a countdown, loses it.
"""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum, auto

from xonix.entities.entity import Entity, EntityKind, Player
from xonix.entities.geometry import Vector
from xonix.field.cell import CellState
from xonix.field.field import Field
from xonix.level.events import Signal
from xonix.level.timer import Timer

logger = logging.getLogger(__name__)

_ENEMY_COLOURS: dict[EntityKind, str] = {
    EntityKind.ENEMY: "red",
    EntityKind.DESTROYER: "purple",
}


class Outcome(Enum):
    """How a round ended."""

    WON = auto()
    LOST = auto()


@dataclasses.dataclass(eq=False)
class Level:
    """Field, entities, clock and the rules tying them together.

    Attributes:
        field: The claimable grid.
        player: The player entity.
        enemies: Enemies and destroyers, in creation order.
        background: Background colour (rendering only).
        unclaimed_color: Colour of UNCLAIMED cells.
        claimed_color: Colour of CLAIMED cells.
        claiming_color: Colour of the player's trail.
        claim_ratio_win: Claimed ratio that must be exceeded to win.
        default_player_position: Where the player respawns after dying.
        countdown_time: Seconds on the clock, or None to count up.
        timer: The round clock.
        outcome: Set once the round is won or lost.
    """

    field: Field
    player: Player
    enemies: list[Entity] = dataclasses.field(default_factory=list)
    background: str = "#FFFFFF"
    unclaimed_color: str = "#000000"
    claimed_color: str = "#00000000"
    claiming_color: str = "#00FF00"
    claim_ratio_win: float = 0.8
    default_player_position: Vector = dataclasses.field(default_factory=Vector)
    countdown_time: int | None = None
    timer: Timer = dataclasses.field(init=False, repr=False)
    outcome: Outcome | None = dataclasses.field(init=False, default=None)

    def __post_init__(self) -> None:
        """Colour the enemies by kind and wire the clock to ``lose``."""
        self.on_win = Signal("win")
        self.on_die = Signal("die")
        self.on_lose = Signal("lose")
        for enemy in self.enemies:
            enemy.color = _ENEMY_COLOURS.get(enemy.kind, enemy.color)
        self.timer = Timer()
        self.timer.on_time_up.subscribe(self.lose)

    @classmethod
    def empty(cls, width: int = 0, height: int = 0) -> Level:
        """Return a placeholder level with no enemies."""
        return cls(field=Field(width=width, height=height), player=Player())

    @property
    def entities(self) -> list[Entity]:
        """Player first, then enemies in creation order."""
        return [self.player, *self.enemies]

    def entity_at(self, x: int, y: int, exclude: Entity | None = None) -> Entity | None:
        """Return the first entity whose cell is ``(x, y)``, skipping ``exclude``."""
        for entity in self.entities:
            if entity is exclude:
                continue
            if not entity.position.differs_rounded(x, y):
                return entity
        return None

    def enemy_positions(self) -> list[tuple[int, int]]:
        """Rounded cell of every enemy."""
        return [enemy.position.rounded for enemy in self.enemies]

    def update(self, delta: float) -> None:
        """Advance every entity by one logical step, player first."""
        for entity in self.entities:
            entity.update(delta, self)

    def start_timer(self) -> None:
        """Start the clock: count down from ``countdown_time`` if set."""
        if self.countdown_time is None:
            self.timer.start(countdown=False, start_seconds=0)
        else:
            self.timer.start(countdown=True, start_seconds=self.countdown_time)

    def die(self) -> None:
        """Take a life, respawn the player and wipe its unfinished trail."""
        player = self.player
        player.lives -= 1
        player.speed = 0.0
        player.position.set_from(self.default_player_position)
        player.claiming = False
        self.field.clear_claiming()
        logger.info("Player died, %d lives left", player.lives)
        self.on_die.publish()
        if player.lives < 0:
            self.lose()

    def claim(self) -> None:
        """Seal the player's trail and check the win condition."""
        self.field.claim(self.enemy_positions())
        ratio = self.field.claimed_ratio()
        if ratio > self.claim_ratio_win:
            self._win(ratio)

    def lose(self) -> None:
        """End the round as lost (at most once)."""
        if self.outcome is not None:
            return
        self.outcome = Outcome.LOST
        logger.info("Round lost")
        self.on_lose.publish()

    def get_color(self, state: CellState) -> str:
        """Return the display colour for a stored cell state.

        Raises:
            ValueError: If ``state`` has no colour (e.g. OUT_OF_BOUNDS).
        """
        if state == CellState.UNCLAIMED:
            return self.unclaimed_color
        if state == CellState.CLAIMED:
            return self.claimed_color
        if state == CellState.CLAIMING:
            return self.claiming_color
        msg = f"No colour for cell state {state!r}"
        raise ValueError(msg)

    def _win(self, ratio: float) -> None:
        if self.outcome is not None:
            return
        self.outcome = Outcome.WON
        logger.info("Round won with %.1f%% claimed", ratio * 100)
        self.on_win.publish()
