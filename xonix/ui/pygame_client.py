"""Pygame 2D visualization and keyboard input for Xonix.

Renders the field, the entities and a HUD panel in a window, and maps
arrow keys to player direction commands.  Real elapsed time from the
Pygame clock is fed into the game, which turns it into fixed-cadence
simulation ticks and one-second clock ticks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from xonix.level.level import Level
    from xonix.simulation.engine import Game

_PANEL_BG = (30, 30, 30)
_TEXT = (200, 200, 200)


class PygameRenderer:
    """Output sink drawing a Level into a Pygame window.

    Attributes:
        game: The game being displayed and controlled.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    _ARROWS: ClassVar[dict[int, tuple[int, int]]] = {
        pygame.K_LEFT: (-1, 0),
        pygame.K_RIGHT: (1, 0),
        pygame.K_UP: (0, -1),
        pygame.K_DOWN: (0, 1),
    }

    def __init__(self, game: Game, width: int, height: int, cell_size: int = 8) -> None:
        """Open the window and attach this renderer as the game's sink.

        Args:
            game: The game to render.
            width: Field columns.
            height: Field rows.
            cell_size: Pixel width/height per grid cell.
        """
        self.game = game
        self.cell_size = cell_size
        self._panel_width = 180
        self._field_w = width * cell_size
        self._field_h = height * cell_size

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self._field_w + self._panel_width, self._field_h),
        )
        pygame.display.set_caption("Xonix")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.message = ""
        self._colour_cache: dict[str, pygame.Color] = {}

        game.sink = self

    def run(self, fps: int = 60) -> None:
        """Main loop: handle events, advance the game, present the frame.

        Args:
            fps: Target display frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            self.game.advance(dt)
            pygame.display.flip()

        pygame.quit()

    def draw(self, level: Level) -> None:
        """Render one frame of ``level`` (called by the game every tick)."""
        self.screen.fill(self._colour(level.background))
        self._draw_field(level)
        self._draw_entities(level)
        self._draw_info_panel(level)

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    if self.game.is_paused():
                        self.game.resume()
                    elif self.game.is_running():
                        self.game.pause()
                        self.draw(self.game.level)
                elif event.key in self._ARROWS:
                    self.game.steer(*self._ARROWS[event.key])

    def _colour(self, name: str) -> pygame.Color:
        colour = self._colour_cache.get(name)
        if colour is None:
            colour = pygame.Color(name)
            self._colour_cache[name] = colour
        return colour

    def _draw_field(self, level: Level) -> None:
        """Draw every cell; fully transparent colours show the background."""
        cs = self.cell_size
        overlay = pygame.Surface((self._field_w, self._field_h), pygame.SRCALPHA)
        for x, y, state in level.field.iter_cells():
            colour = self._colour(level.get_color(state))
            if colour.a == 0:
                continue
            pygame.draw.rect(overlay, colour, (x * cs, y * cs, cs, cs))
        self.screen.blit(overlay, (0, 0))

    def _draw_entities(self, level: Level) -> None:
        """Draw each entity as a filled square on its rounded cell."""
        cs = self.cell_size
        for entity in level.entities:
            x, y = entity.position.rounded
            pygame.draw.rect(
                self.screen,
                self._colour(entity.color),
                (x * cs, y * cs, cs, cs),
            )

    def _draw_info_panel(self, level: Level) -> None:
        """Draw lives, claimed ratio and clock on the right side."""
        panel_x = self._field_w
        pygame.draw.rect(
            self.screen,
            _PANEL_BG,
            (panel_x, 0, self._panel_width, self._field_h),
        )

        lines = [
            f"Lives: {level.player.lives}",
            f"Claimed: {level.field.claimed_ratio() * 100:.2f}%",
            f"Time: {level.timer}",
            f"{'PAUSED' if self.game.is_paused() else ''}",
            self.message,
            "",
            "--- Controls ---",
            "Arrows: move",
            "SPACE: pause",
            "ESC: quit",
        ]

        y = 10
        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x + 10, y))
            y += 18
