"""Pygame shell for the pattern memory game.

Gathers pointer/quit input into a ``FrameInput``, drives the
``FramePipeline`` once per frame and draws the active scene's content.
Game rules, hit-testing and scene flow live in the core modules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pygame

from .audio import ToneCuePlayer
from .clock import RealClock
from .geometry import Vec2
from .pattern import PatternEngine
from .persistence import HighScoreStore
from .pipeline import FrameInput, FramePipeline, GameContext
from .scenes import Label, SceneContent

logger = logging.getLogger(__name__)

WINDOW_SIZE = (960, 720)
TARGET_FPS = 60
BACKGROUND = (245, 245, 245)
TEXT_COLOR = (0, 0, 0)


def screen_to_world(pos: tuple[float, float], size: tuple[int, int]) -> Vec2:
    w, h = size
    return Vec2(float(pos[0]) - w / 2.0, h / 2.0 - float(pos[1]))


def world_to_screen(p: Vec2, size: tuple[int, int]) -> tuple[float, float]:
    w, h = size
    return (p.x + w / 2.0, h / 2.0 - p.y)


class App:
    def __init__(self, surface: pygame.Surface, pipeline: FramePipeline) -> None:
        self._surface = surface
        self._pipeline = pipeline
        self._fonts: dict[int, pygame.font.Font] = {}
        self._released = False
        self._quit = False
        self._event_pos: tuple[int, int] | None = None

    @property
    def running(self) -> bool:
        return self._pipeline.running

    @property
    def context(self) -> GameContext:
        return self._pipeline.context

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._quit = True
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            # Only a focused window closes on Escape.
            if pygame.key.get_focused():
                self._quit = True
        elif event.type == pygame.MOUSEMOTION:
            self._event_pos = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._event_pos = event.pos
            self._released = True

    def step(self) -> None:
        frame = FrameInput(
            pointer=self._pointer_world(),
            pointer_released=self._released,
            quit_requested=self._quit,
        )
        self._released = False
        self._quit = False
        self._event_pos = None
        self._pipeline.step(frame)

    def render(self) -> None:
        surface = self._surface
        surface.fill(BACKGROUND)
        content = self._pipeline.context.scenes.content
        self._draw_shapes(surface, content)
        for label in content.labels:
            if label.visible:
                self._draw_label(surface, label)

    def _pointer_world(self) -> Vec2 | None:
        size = self._surface.get_size()
        if self._event_pos is not None:
            return screen_to_world(self._event_pos, size)
        if not pygame.mouse.get_focused():
            return None
        return screen_to_world(pygame.mouse.get_pos(), size)

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _draw_shapes(self, surface: pygame.Surface, content: SceneContent) -> None:
        size = surface.get_size()
        for item in content.shapes:
            if item.color is None:
                continue
            points = [
                world_to_screen(item.transform.apply(corner), size)
                for corner in item.tracker.shape.corners()
            ]
            pygame.draw.polygon(surface, item.color, points)

    def _draw_label(self, surface: pygame.Surface, label: Label) -> None:
        text = self._font(label.size).render(label.text, True, TEXT_COLOR)
        pos = world_to_screen(label.position, surface.get_size())
        if label.anchor == "bottomleft":
            rect = text.get_rect(bottomleft=(int(pos[0]), int(pos[1])))
        else:
            rect = text.get_rect(center=(int(pos[0]), int(pos[1])))
        surface.blit(text, rect)


def run(*, max_frames: int | None = None, event_injector: Callable[[int], None] | None = None) -> int:
    pygame.init()

    pygame.display.set_caption("Pattern Memory")
    surface = pygame.display.set_mode(WINDOW_SIZE)
    clock = pygame.time.Clock()

    ctx = GameContext.create(
        world_size=(float(WINDOW_SIZE[0]), float(WINDOW_SIZE[1])),
        store=HighScoreStore(HighScoreStore.default_path()),
        engine=PatternEngine(),
        cues=ToneCuePlayer(),
    )
    logger.info("Loaded high score %d", ctx.high_score)
    app = App(surface=surface, pipeline=FramePipeline(ctx, clock=RealClock()))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.step()
            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0
