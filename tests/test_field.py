"""Tests for xonix.field — cell states, counts and the claim flood fill."""

from collections import deque

import numpy as np
import pytest
from numpy.random import Generator

from xonix.field.cell import STORED_STATES, CellState
from xonix.field.field import Field


def _total(field: Field) -> int:
    return sum(field.count(state) for state in STORED_STATES)


def _assert_counts_match(field: Field) -> None:
    for state in STORED_STATES:
        assert field.count(state) == int(np.count_nonzero(field.cells == state))
    assert _total(field) == field.width * field.height


def _reachable(blocked: np.ndarray, seeds: list[tuple[int, int]]) -> set[tuple[int, int]]:
    """Plain BFS over unblocked cells, used as a reference."""
    height, width = blocked.shape
    seen: set[tuple[int, int]] = set()
    queue = deque(seeds)
    while queue:
        x, y = queue.popleft()
        if not (0 <= x < width and 0 <= y < height):
            continue
        if (x, y) in seen or blocked[y, x]:
            continue
        seen.add((x, y))
        queue.extend([(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)])
    return seen


def _walled_field() -> Field:
    """7x5 bordered field whose interior is split by a trail down column 3."""
    field = Field(width=7, height=5)
    for y in range(5):
        for x in range(7):
            if x in (0, 6) or y in (0, 4):
                field.set(CellState.CLAIMED, x, y)
    for y in range(1, 4):
        field.set(CellState.CLAIMING, 3, y)
    return field


class TestCellState:
    """Tests for the CellState enum."""

    def test_out_of_bounds_is_not_stored(self) -> None:
        assert CellState.OUT_OF_BOUNDS not in STORED_STATES
        assert len(STORED_STATES) == 3


class TestField:
    """Tests for Field storage and counters."""

    def test_starts_unclaimed(self) -> None:
        field = Field(width=4, height=3)
        assert field.cells.shape == (3, 4)
        assert field.count(CellState.UNCLAIMED) == 12
        assert field.count(CellState.CLAIMED) == 0
        assert field.claimed_ratio() == 0.0

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_get_out_of_bounds(self, x: int, y: int) -> None:
        field = Field(width=4, height=3)
        assert field.get(x, y) == CellState.OUT_OF_BOUNDS

    def test_set_updates_counts(self) -> None:
        field = Field(width=4, height=3)
        field.set(CellState.CLAIMED, 1, 2)
        assert field.get(1, 2) == CellState.CLAIMED
        assert field.count(CellState.CLAIMED) == 1
        assert field.count(CellState.UNCLAIMED) == 11
        field.set(CellState.CLAIMING, 1, 2)
        assert field.count(CellState.CLAIMED) == 0
        assert field.count(CellState.CLAIMING) == 1
        _assert_counts_match(field)

    def test_set_same_state_keeps_counts(self) -> None:
        field = Field(width=2, height=2)
        field.set(CellState.UNCLAIMED, 0, 0)
        assert field.count(CellState.UNCLAIMED) == 4

    def test_set_out_of_bounds_raises(self) -> None:
        field = Field(width=4, height=3)
        with pytest.raises(IndexError):
            field.set(CellState.CLAIMED, 4, 0)

    def test_iter_cells_row_major(self) -> None:
        field = Field(width=3, height=2)
        field.set(CellState.CLAIMED, 2, 0)
        cells = list(field.iter_cells())
        assert [(x, y) for x, y, _ in cells] == [
            (0, 0),
            (1, 0),
            (2, 0),
            (0, 1),
            (1, 1),
            (2, 1),
        ]
        assert cells[2][2] == CellState.CLAIMED

    def test_for_each_cell_visits_every_cell(self) -> None:
        field = Field(width=3, height=2)
        visited: list[tuple[int, int, CellState]] = []
        field.for_each_cell(lambda x, y, state: visited.append((x, y, state)))
        assert visited == list(field.iter_cells())

    def test_claimed_ratio(self, bordered_field: Field) -> None:
        assert bordered_field.claimed_ratio() == pytest.approx(16 / 25)

    def test_empty_field_ratio(self) -> None:
        assert Field(width=0, height=0).claimed_ratio() == 0.0

    def test_clear_claiming(self, bordered_field: Field) -> None:
        bordered_field.set(CellState.CLAIMING, 1, 1)
        bordered_field.set(CellState.CLAIMING, 2, 1)
        bordered_field.clear_claiming()
        assert bordered_field.count(CellState.CLAIMING) == 0
        assert bordered_field.get(1, 1) == CellState.UNCLAIMED
        assert bordered_field.count(CellState.CLAIMED) == 16
        _assert_counts_match(bordered_field)


class TestClaim:
    """Tests for the enemy-seeded claim algorithm."""

    def test_enemy_keeps_whole_interior(self, bordered_field: Field) -> None:
        bordered_field.claim([(2, 2)])
        assert bordered_field.count(CellState.CLAIMED) == 16
        for y in range(1, 4):
            for x in range(1, 4):
                assert bordered_field.get(x, y) == CellState.UNCLAIMED

    def test_trail_cuts_off_corner(self, bordered_field: Field) -> None:
        bordered_field.set(CellState.CLAIMING, 2, 1)
        bordered_field.set(CellState.CLAIMING, 1, 2)
        before = bordered_field.claimed_ratio()

        bordered_field.claim([(2, 2)])

        assert bordered_field.get(2, 1) == CellState.CLAIMED
        assert bordered_field.get(1, 2) == CellState.CLAIMED
        assert bordered_field.get(1, 1) == CellState.CLAIMED
        assert bordered_field.get(2, 2) == CellState.UNCLAIMED
        assert bordered_field.get(3, 3) == CellState.UNCLAIMED
        assert bordered_field.count(CellState.CLAIMED) == 19
        assert bordered_field.claimed_ratio() > before

    def test_no_enemies_claims_everything(self, bordered_field: Field) -> None:
        bordered_field.claim([])
        assert bordered_field.claimed_ratio() == 1.0

    def test_enemy_on_claimed_cell_seeds_nothing(self, bordered_field: Field) -> None:
        bordered_field.claim([(0, 0)])
        assert bordered_field.claimed_ratio() == 1.0

    def test_other_enemies_seed_past_one_on_claimed_cell(self, bordered_field: Field) -> None:
        bordered_field.claim([(0, 0), (2, 2)])
        assert bordered_field.count(CellState.CLAIMED) == 16
        for y in range(1, 4):
            for x in range(1, 4):
                assert bordered_field.get(x, y) == CellState.UNCLAIMED

    def test_enemy_out_of_bounds_is_ignored(self, bordered_field: Field) -> None:
        bordered_field.claim([(-3, 9), (2, 2)])
        assert bordered_field.count(CellState.CLAIMED) == 16

    def test_region_reachable_by_any_enemy_stays(self) -> None:
        one = _walled_field()
        one.claim([(1, 1)])
        assert one.get(4, 2) == CellState.CLAIMED
        assert one.get(5, 3) == CellState.CLAIMED
        assert one.get(1, 2) == CellState.UNCLAIMED

        field = _walled_field()
        field.claim([(1, 1), (5, 3)])
        assert field.get(4, 2) == CellState.UNCLAIMED
        assert field.get(1, 2) == CellState.UNCLAIMED
        assert field.get(3, 2) == CellState.CLAIMED

    def test_fill_wraps_around_obstacles(self) -> None:
        # U-shaped wall: the pocket is reachable through its open top.
        field = Field(width=6, height=6)
        for x, y in [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3), (4, 3), (4, 2), (4, 1)]:
            field.set(CellState.CLAIMED, x, y)
        field.claim([(0, 5)])
        assert field.get(2, 1) == CellState.UNCLAIMED
        assert field.get(3, 2) == CellState.UNCLAIMED
        assert field.count(CellState.CLAIMED) == 8

    def test_matches_reference_fill(self, rng: Generator) -> None:
        for _ in range(20):
            width = int(rng.integers(1, 16))
            height = int(rng.integers(1, 16))
            field = Field(width=width, height=height)
            states = rng.choice(
                [CellState.UNCLAIMED, CellState.CLAIMED, CellState.CLAIMING],
                size=(height, width),
                p=[0.6, 0.3, 0.1],
            )
            for y in range(height):
                for x in range(width):
                    field.set(CellState(int(states[y, x])), x, y)
            enemies = [
                (int(rng.integers(0, width)), int(rng.integers(0, height)))
                for _ in range(3)
            ]
            reachable = _reachable(states != CellState.UNCLAIMED, enemies)

            field.claim(enemies)

            for x, y, state in field.iter_cells():
                if (x, y) in reachable:
                    assert state == CellState.UNCLAIMED
                else:
                    assert state == CellState.CLAIMED
            _assert_counts_match(field)
            assert 0.0 <= field.claimed_ratio() <= 1.0
