"""Entry point for ``python -m xonix``.

Loads the default YAML config, builds a level from it, and opens a
Pygame window to play it.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from xonix.level.builder import LevelBuilder
from xonix.simulation.config import GameConfig
from xonix.simulation.engine import Game
from xonix.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, build the level, launch the renderer."""
    parser = argparse.ArgumentParser(
        prog="xonix",
        description="Xonix - claim the field, dodge the enemies",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=8,
        help="Pixel size per grid cell (default: 8)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Display frames per second (default: 60)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig.from_yaml(args.config)
    level = LevelBuilder.from_config(config).build()

    game = Game(fps=config.fps)
    renderer = PygameRenderer(
        game=game,
        width=config.field_width,
        height=config.field_height,
        cell_size=args.cell_size,
    )

    def finish(message: str) -> None:
        renderer.message = message
        game.stop()

    level.on_die.subscribe(lambda: setattr(renderer, "message", "Ouch!"))
    level.on_win.subscribe(lambda: finish("You win!"))
    level.on_lose.subscribe(lambda: finish("Game over"))

    game.start(level)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
