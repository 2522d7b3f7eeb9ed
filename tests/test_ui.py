"""Smoke tests for the UI module (no display required)."""

from __future__ import annotations

from xonix.ui.pygame_client import PygameRenderer


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None
    assert callable(PygameRenderer.draw)


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from xonix.__main__ import main

    assert callable(main)


def test_arrow_keys_cover_every_direction() -> None:
    """Each arrow key steers along exactly one axis."""
    directions = set(PygameRenderer._ARROWS.values())
    assert directions == {(-1, 0), (1, 0), (0, -1), (0, 1)}
