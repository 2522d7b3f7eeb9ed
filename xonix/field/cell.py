"""CellState — the ownership status of a single grid cell.

States are stored directly in the Field's NumPy grid, so the enum is an
``IntEnum`` whose values double as the array contents.
"""

from __future__ import annotations

from enum import IntEnum


class CellState(IntEnum):
    """Claim status of a grid cell.

    ``OUT_OF_BOUNDS`` is never stored; it is only returned by lookups that
    fall outside the field.
    """

    OUT_OF_BOUNDS = 0
    UNCLAIMED = 1
    CLAIMED = 2
    CLAIMING = 3


STORED_STATES: tuple[CellState, ...] = (
    CellState.UNCLAIMED,
    CellState.CLAIMED,
    CellState.CLAIMING,
)
