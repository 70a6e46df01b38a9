from __future__ import annotations

import os
from pathlib import Path

import pytest


def test_ui_smoke_click_through_to_game(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Headless SDL for CI.
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setenv("PATTERN_MEMORY_SAVE_PATH", str(tmp_path / "score.json"))

    import pygame

    from pattern_memory.app import WINDOW_SIZE, run

    center = (WINDOW_SIZE[0] // 2, WINDOW_SIZE[1] // 2)

    def inject(frame: int) -> None:
        # Navigate: Click to start -> Main Menu -> Start Game, then poke a pad.
        if frame in (2, 4):
            pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, {"pos": center, "button": 1}))
        elif frame == 6:
            pygame.event.post(pygame.event.Event(pygame.MOUSEMOTION, {"pos": (center[0], 40), "rel": (0, 0), "buttons": (0, 0, 0)}))
        elif frame == 7:
            pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, {"pos": (center[0], 40), "button": 1}))

    assert run(max_frames=20, event_injector=inject) == 0


def test_ui_smoke_escape_quits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setenv("PATTERN_MEMORY_SAVE_PATH", str(tmp_path / "score.json"))

    import pygame

    from pattern_memory.app import run

    monkeypatch.setattr(pygame.key, "get_focused", lambda: True)

    def inject(frame: int) -> None:
        if frame == 1:
            pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_ESCAPE, "unicode": ""}))

    # Escape ends the loop well before the frame cap.
    assert run(max_frames=500, event_injector=inject) == 0
