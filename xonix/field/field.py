"""Field — the claimable grid at the heart of a level.

The Field owns the cell states arranged in a 2D NumPy array, keeps a
running count of cells per state, and implements the claim algorithm
that seals off every region no enemy can reach.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from xonix.field.cell import STORED_STATES, CellState

logger = logging.getLogger(__name__)


@dataclass
class Field:
    """A width x height grid of cell states.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: Cell states indexed as ``cells[y, x]``.
    """

    width: int
    height: int
    cells: NDArray[np.int8] = field(init=False, repr=False)
    _counts: dict[CellState, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Start with every cell unclaimed."""
        self.cells = np.full(
            (self.height, self.width),
            CellState.UNCLAIMED,
            dtype=np.int8,
        )
        self._counts = {state: 0 for state in STORED_STATES}
        self._counts[CellState.UNCLAIMED] = self.size

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the field."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> CellState:
        """Return the state at ``(x, y)``, or OUT_OF_BOUNDS outside the grid."""
        if not self.in_bounds(x, y):
            return CellState.OUT_OF_BOUNDS
        return CellState(int(self.cells[y, x]))

    def set(self, state: CellState, x: int, y: int) -> None:
        """Write a single cell.

        Args:
            state: New state for the cell.
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        self._write((y, x), state)

    def count(self, state: CellState) -> int:
        """Return how many cells currently hold ``state``."""
        return self._counts.get(state, 0)

    def claimed_ratio(self) -> float:
        """Fraction of the field that is claimed (0.0 for an empty field)."""
        if self.size == 0:
            return 0.0
        return self._counts[CellState.CLAIMED] / self.size

    def iter_cells(self) -> Iterator[tuple[int, int, CellState]]:
        """Yield ``(x, y, state)`` for every cell, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, CellState(int(self.cells[y, x]))

    def for_each_cell(self, visitor: Callable[[int, int, CellState], None]) -> None:
        """Call ``visitor(x, y, state)`` for every cell in row-major order."""
        for x, y, state in self.iter_cells():
            visitor(x, y, state)

    def clear_claiming(self) -> None:
        """Discard an unfinished trail: CLAIMING cells become UNCLAIMED."""
        self._write(self.cells == CellState.CLAIMING, CellState.UNCLAIMED)

    def claim(self, enemy_positions: Iterable[tuple[int, int]]) -> None:
        """Seal the trail and claim every region no enemy can reach.

        1. The player's CLAIMING trail is converted to CLAIMED.
        2. From each enemy's cell, a scan-line flood fill marks all cells
           reachable without crossing CLAIMED territory.
        3. Every cell not marked in step 2 becomes CLAIMED.

        Args:
            enemy_positions: Rounded ``(x, y)`` cell of each enemy.
        """
        self._write(self.cells == CellState.CLAIMING, CellState.CLAIMED)

        could_claim = np.ones((self.height, self.width), dtype=bool)
        for x, y in enemy_positions:
            if not self.in_bounds(x, y):
                continue
            self._mark_reachable(could_claim, x, y)

        before = self._counts[CellState.CLAIMED]
        self._write(could_claim, CellState.CLAIMED)
        logger.debug(
            "Claimed %d cells, ratio now %.3f",
            self._counts[CellState.CLAIMED] - before,
            self.claimed_ratio(),
        )

    # -- Private helpers --

    def _write(self, where: tuple[int, int] | NDArray[np.bool_], state: CellState) -> None:
        """Assign ``state`` to the selected cells and keep counts in step.

        ``where`` is either a single ``(y, x)`` index or a boolean mask.
        Every mutation of ``cells`` goes through here.
        """
        previous = self.cells[where]
        values, counts = np.unique(previous, return_counts=True)
        for value, n in zip(values, counts):
            self._counts[CellState(int(value))] -= int(n)
        self._counts[state] += int(np.size(previous))
        self.cells[where] = state

    def _blocked_row(self, could_claim: NDArray[np.bool_], y: int) -> NDArray[np.bool_]:
        """Fill boundaries along row ``y``: claimed or already visited."""
        return (self.cells[y] == CellState.CLAIMED) | ~could_claim[y]

    def _mark_reachable(
        self,
        could_claim: NDArray[np.bool_],
        start_x: int,
        start_y: int,
    ) -> None:
        """Scan-line flood fill clearing ``could_claim`` from a seed cell.

        Each popped seed is widened to the full open span of its row.
        For the rows above and below, one seed is pushed per run of open
        cells touching that span.
        """
        stack = [(start_x, start_y)]
        while stack:
            x, y = stack.pop()
            blocked = self._blocked_row(could_claim, y)
            if blocked[x]:
                continue

            left = np.flatnonzero(blocked[:x])
            right = np.flatnonzero(blocked[x + 1 :])
            lx = int(left[-1]) + 1 if left.size else 0
            rx = x + 1 + int(right[0]) if right.size else self.width
            could_claim[y, lx:rx] = False

            for ny in (y - 1, y + 1):
                if not 0 <= ny < self.height:
                    continue
                open_cells = ~self._blocked_row(could_claim, ny)[lx:rx]
                run_starts = open_cells & ~np.concatenate(([False], open_cells[:-1]))
                stack.extend((lx + int(i), ny) for i in np.flatnonzero(run_starts))
