from __future__ import annotations

import os
import random
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from pattern_memory.app import WINDOW_SIZE, App
from pattern_memory.pattern import PatternEngine
from pattern_memory.persistence import HighScoreStore
from pattern_memory.pipeline import FramePipeline, GameContext


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t


@pytest.fixture
def app(tmp_path: Path) -> Iterator[App]:
    pygame.init()
    ctx = GameContext.create(
        world_size=(float(WINDOW_SIZE[0]), float(WINDOW_SIZE[1])),
        store=HighScoreStore(tmp_path / "score.json"),
        engine=PatternEngine(rng=random.Random(4)),
    )
    yield App(surface=pygame.Surface(WINDOW_SIZE), pipeline=FramePipeline(ctx, clock=FakeClock()))
    pygame.quit()


def _escape() -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_ESCAPE, "unicode": ""})


def test_escape_in_unfocused_window_is_ignored(app: App, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pygame.key, "get_focused", lambda: False)
    app.handle_event(_escape())
    app.step()
    assert app.running


def test_escape_in_focused_window_quits(app: App, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pygame.key, "get_focused", lambda: True)
    app.handle_event(_escape())
    app.step()
    assert not app.running


def test_window_close_quits_regardless_of_focus(app: App, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pygame.key, "get_focused", lambda: False)
    app.handle_event(pygame.event.Event(pygame.QUIT, {}))
    app.step()
    assert not app.running
