"""Entity — anything that moves across the field.

Entities keep a continuous position and direction but interact with the
grid only through their rounded cell.  Each tick an entity proposes a
move, probes up to three candidate cells for collisions, and either
advances or hands the collision to the behaviour registered for its
kind.

Collision probing order:

- **Horizontal first**: ``(next_x, curr_y)``.
- **Vertical second**: ``(curr_x, next_y)``.
- **Diagonal last**: ``(next_x, next_y)``.

For each candidate the cell state is checked before other entities, and
the first candidate that collides is the one reported.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from xonix.entities.geometry import Vector

if TYPE_CHECKING:
    from xonix.field.cell import CellState
    from xonix.level.level import Level


class EntityKind(Enum):
    """Closed set of entity variants, each with its own behaviour."""

    PLAYER = auto()
    ENEMY = auto()
    DESTROYER = auto()


@dataclass(frozen=True)
class Collision:
    """What an entity ran into this tick.

    Attributes:
        x: Column of the candidate cell.
        y: Row of the candidate cell.
        current_cell_state: State of the cell the entity stands on.
        collided_cell_state: State of the candidate cell, for cell
            collisions.
        collided_entity: The entity occupying the candidate cell, for
            entity collisions.
    """

    x: int
    y: int
    current_cell_state: CellState
    collided_cell_state: CellState | None = None
    collided_entity: Entity | None = None


@dataclass(eq=False)
class Entity:
    """A moving piece on the field.

    Attributes:
        kind: Which behaviour variant this entity follows.
        position: Continuous position; the rounded value is its cell.
        direction: Per-axis direction, each component in {-1, 0, 1}.
        speed: Cells per logical step.
        color: Display colour (rendering only).
    """

    kind: EntityKind = EntityKind.ENEMY
    position: Vector = field(default_factory=Vector)
    direction: Vector = field(default_factory=Vector)
    speed: float = 0.0
    color: str = "#000"

    def __post_init__(self) -> None:
        """Reject a PLAYER tag on anything that is not a Player.

        Raises:
            ValueError: If ``kind`` is PLAYER on a plain Entity.
        """
        if self.kind is EntityKind.PLAYER and not isinstance(self, Player):
            msg = "Only Player instances may use EntityKind.PLAYER"
            raise ValueError(msg)

    @classmethod
    def spawn(cls, kind: EntityKind, x: float, y: float) -> Entity:
        """Create a roaming entity heading diagonally at unit speed.

        Args:
            kind: ENEMY or DESTROYER.
            x: Spawn column.
            y: Spawn row.

        Returns:
            A new Entity moving towards ``(+1, +1)``.
        """
        return cls(
            kind=kind,
            position=Vector(x, y),
            direction=Vector(1, 1),
            speed=1.0,
        )

    def update(self, delta: float, level: Level) -> None:
        """Move one logical step, or respond to whatever blocks the move.

        Args:
            delta: Logical step size (multiplies ``speed``).
            level: The level this entity is playing in.
        """
        from xonix.entities.behaviours import behaviour_for

        step = self.speed * delta
        next_x = self.position.x + self.direction.x * step
        next_y = self.position.y + self.direction.y * step

        previous_cell = self.position.rounded
        collision = self._probe(
            level,
            previous_cell,
            (math.floor(next_x), math.floor(next_y)),
        )

        behaviour = behaviour_for(self.kind)
        if collision is not None:
            behaviour.on_collision(self, level, collision)
            return

        self.position.set(next_x, next_y)
        if behaviour.after_move is not None:
            behaviour.after_move(self, level, previous_cell)

    def _probe(
        self,
        level: Level,
        current: tuple[int, int],
        target: tuple[int, int],
    ) -> Collision | None:
        """Return the first collision among the three candidate cells."""
        curr_x, curr_y = current
        next_x, next_y = target
        current_state = level.field.get(curr_x, curr_y)

        for x, y in ((next_x, curr_y), (curr_x, next_y), (next_x, next_y)):
            state = level.field.get(x, y)
            if state != current_state:
                return Collision(x, y, current_state, collided_cell_state=state)
            other = level.entity_at(x, y, exclude=self)
            if other is not None:
                return Collision(x, y, current_state, collided_entity=other)
        return None


@dataclass(eq=False)
class Player(Entity):
    """The entity steered by the human.

    Attributes:
        lives: Remaining lives; the round is lost once this drops below 0.
        claiming: True while the player is drawing a trail through
            unclaimed territory.
    """

    kind: EntityKind = field(default=EntityKind.PLAYER, init=False)
    color: str = "blue"
    lives: int = 3
    claiming: bool = False
