"""Config — load level and game parameters from YAML files.

Field size, entity placements, round rules and display colours live in
YAML and are parsed into a typed dataclass here, so new levels can be
laid out without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _default_enemies() -> list[tuple[int, int]]:
    return [(10, 10), (50, 23), (0, 1)]


def _default_destroyers() -> list[tuple[int, int]]:
    return [(40, 10)]


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        field_width: Number of grid columns.
        field_height: Number of rows.
        border: Thickness of the pre-claimed border.
        player_x: Player spawn column.
        player_y: Player spawn row.
        player_lives: Lives the player starts with.
        claim_ratio_win: Claimed ratio that must be exceeded to win.
        countdown_time: Seconds on the clock; None counts up instead.
        enemies: Spawn cells of plain enemies.
        destroyers: Spawn cells of destroyers.
        fps: Simulation ticks per second.
        background: Background colour.
        unclaimed_color: Colour of unclaimed cells.
        claimed_color: Colour of claimed cells.
        claiming_color: Colour of the player's trail.
    """

    field_width: int = 100
    field_height: int = 50
    border: int = 3
    player_x: int = 50
    player_y: int = 0
    player_lives: int = 3
    claim_ratio_win: float = 0.8
    countdown_time: int | None = 120

    enemies: list[tuple[int, int]] = field(default_factory=_default_enemies)
    destroyers: list[tuple[int, int]] = field(default_factory=_default_destroyers)

    fps: int = 30

    # Display only
    background: str = "#FFFFFF"
    unclaimed_color: str = "#000000"
    claimed_color: str = "#00000000"
    claiming_color: str = "#00FF00"

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Missing keys fall back to the defaults above.  Entity lists are
        given as ``[x, y]`` pairs.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        defaults = cls()
        colours = data.get("colors") or {}
        return cls(
            field_width=data.get("field_width", defaults.field_width),
            field_height=data.get("field_height", defaults.field_height),
            border=data.get("border", defaults.border),
            player_x=data.get("player_x", defaults.player_x),
            player_y=data.get("player_y", defaults.player_y),
            player_lives=data.get("player_lives", defaults.player_lives),
            claim_ratio_win=data.get(
                "claim_ratio_win",
                defaults.claim_ratio_win,
            ),
            countdown_time=data.get("countdown_time", defaults.countdown_time),
            enemies=_pairs(data.get("enemies", defaults.enemies)),
            destroyers=_pairs(data.get("destroyers", defaults.destroyers)),
            fps=data.get("fps", defaults.fps),
            background=colours.get("background", defaults.background),
            unclaimed_color=colours.get("unclaimed", defaults.unclaimed_color),
            claimed_color=colours.get("claimed", defaults.claimed_color),
            claiming_color=colours.get("claiming", defaults.claiming_color),
        )


def _pairs(items: list[list[int]] | list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Normalise YAML ``[x, y]`` lists into coordinate tuples."""
    return [(int(x), int(y)) for x, y in items]
