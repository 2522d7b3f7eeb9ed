"""Behaviours — per-kind collision responses, dispatched by EntityKind.

Each entity kind maps to a ``Behaviour``: a collision response plus an
optional hook that runs after a successful (non-colliding) move.

- **Player**: claims territory when it reaches claimed ground, draws a
  trail while crossing unclaimed ground, dies on its own trail.
- **Enemy**: bounces off whatever it hits and kills the player on
  contact with the player or the player's trail.
- **Destroyer**: the enemy response, then erases any claimed cell it
  bumped into.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from xonix.entities.entity import EntityKind, Player
from xonix.field.cell import CellState

if TYPE_CHECKING:
    from xonix.entities.entity import Collision, Entity
    from xonix.level.level import Level

CollisionResponse = Callable[["Entity", "Level", "Collision"], None]
MoveHook = Callable[["Entity", "Level", "tuple[int, int]"], None]


@dataclass(frozen=True)
class Behaviour:
    """How one entity kind reacts to the world.

    Attributes:
        on_collision: Called instead of moving when a probe collides.
        after_move: Called after the entity advanced, with the cell it
            occupied before the move.
    """

    on_collision: CollisionResponse
    after_move: MoveHook | None = None


def player_collision(entity: Entity, level: Level, collision: Collision) -> None:
    """React to the player bumping into a cell of a different state."""
    player = cast(Player, entity)
    match collision.collided_cell_state:
        case CellState.OUT_OF_BOUNDS:
            player.speed = 0.0
        case CellState.UNCLAIMED:
            player.position.set(collision.x, collision.y)
            player.claiming = True
        case CellState.CLAIMED:
            # The cell being left is the last segment of the trail.
            x, y = player.position.rounded
            level.field.set(CellState.CLAIMING, x, y)
            player.position.set(collision.x, collision.y)
            level.claim()
            player.claiming = False
        case CellState.CLAIMING:
            player.claiming = False
            level.die()


def player_after_move(entity: Entity, level: Level, previous: tuple[int, int]) -> None:
    """Paint the trail behind a claiming player as it leaves each cell."""
    player = cast(Player, entity)
    prev_x, prev_y = previous
    if (
        player.claiming
        and player.position.differs_rounded(prev_x, prev_y)
        and level.field.get(prev_x, prev_y) != CellState.CLAIMED
    ):
        level.field.set(CellState.CLAIMING, prev_x, prev_y)


def enemy_collision(entity: Entity, level: Level, collision: Collision) -> None:
    """Reflect off the obstacle on each axis it was hit on.

    Touching the player or the player's trail costs the player a life.
    """
    if collision.x != entity.position.x_rounded:
        entity.direction.x *= -1
    if collision.y != entity.position.y_rounded:
        entity.direction.y *= -1

    hit_player = isinstance(collision.collided_entity, Player)
    if collision.collided_cell_state == CellState.CLAIMING or hit_player:
        level.die()


def destroyer_collision(entity: Entity, level: Level, collision: Collision) -> None:
    """Bounce like an enemy, then erase the claimed cell that was hit."""
    enemy_collision(entity, level, collision)
    if collision.collided_cell_state == CellState.CLAIMED:
        level.field.set(CellState.UNCLAIMED, collision.x, collision.y)


BEHAVIOURS: dict[EntityKind, Behaviour] = {
    EntityKind.PLAYER: Behaviour(player_collision, player_after_move),
    EntityKind.ENEMY: Behaviour(enemy_collision),
    EntityKind.DESTROYER: Behaviour(destroyer_collision),
}


def behaviour_for(kind: EntityKind) -> Behaviour:
    """Return the behaviour registered for ``kind``."""
    return BEHAVIOURS[kind]
