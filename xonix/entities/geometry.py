"""Vector — a continuous 2D coordinate pair.

Entities move in continuous space; every grid interaction uses the
floored ("rounded") coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vector:
    """Mutable pair of fractional coordinates.

    Attributes:
        x: Horizontal component.
        y: Vertical component.
    """

    x: float = 0.0
    y: float = 0.0

    @property
    def x_rounded(self) -> int:
        """Column of the cell containing ``x``."""
        return math.floor(self.x)

    @property
    def y_rounded(self) -> int:
        """Row of the cell containing ``y``."""
        return math.floor(self.y)

    @property
    def rounded(self) -> tuple[int, int]:
        """The ``(column, row)`` cell this vector falls in."""
        return self.x_rounded, self.y_rounded

    def set(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def set_from(self, other: Vector) -> None:
        self.x = other.x
        self.y = other.y

    def differs_rounded(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` is not the cell this vector falls in."""
        return x != self.x_rounded or y != self.y_rounded
