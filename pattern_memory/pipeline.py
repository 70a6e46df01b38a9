"""Per-frame orchestration.

One ``FramePipeline.step`` runs every stage in ``STAGES`` exactly once, in
order. Later stages read what earlier stages wrote during the same frame, so
the order is part of the contract.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from .clock import Clock
from .geometry import Vec2
from .hover import apply_hover_visuals, first_hovered, force_unhover_disabled, update_hover_state
from .layouts import setup_for
from .pattern import PatternEngine, PatternOutcome
from .persistence import HighScoreStore
from .scenes import Scene, SceneMachine

logger = logging.getLogger(__name__)


class CuePlayer(Protocol):
    def play(self, symbols: tuple[int, ...]) -> None:
        """Sound the cue for every symbol given, simultaneously."""


class SilentCuePlayer:
    def play(self, symbols: tuple[int, ...]) -> None:
        _ = symbols


@dataclass(frozen=True, slots=True)
class FrameInput:
    """What the input collaborator reports for one frame.

    ``pointer`` is already in world space, or ``None`` when the pointer is
    off the playable surface.
    """

    pointer: Vec2 | None = None
    pointer_released: bool = False
    quit_requested: bool = False


@dataclass(slots=True)
class GameContext:
    world_size: tuple[float, float]
    store: HighScoreStore
    engine: PatternEngine
    cues: CuePlayer = field(default_factory=SilentCuePlayer)
    scenes: SceneMachine = field(default_factory=lambda: SceneMachine(setup_for=setup_for))
    high_score: int = 0
    old_high_score: int = 0
    pointer: Vec2 | None = None
    running: bool = True

    @classmethod
    def create(
        cls,
        *,
        world_size: tuple[float, float],
        store: HighScoreStore,
        engine: PatternEngine | None = None,
        cues: CuePlayer | None = None,
    ) -> GameContext:
        return cls(
            world_size=world_size,
            store=store,
            engine=engine or PatternEngine(),
            cues=cues or SilentCuePlayer(),
            high_score=store.load_high_score(),
        )


Stage = Callable[[GameContext, FrameInput, float], None]


def refresh_pointer(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    ctx.pointer = frame.pointer


def update_hover(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    update_hover_state(ctx.scenes.content.shapes, ctx.pointer)


def unhover_disabled(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    force_unhover_disabled(ctx.scenes.content.shapes)


def swap_hover_visuals(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    apply_hover_visuals(ctx.scenes.content.shapes)


def advance_playback(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    if ctx.scenes.current is not Scene.GAME:
        return

    step = ctx.engine.tick(dt)
    content = ctx.scenes.content

    if step.outcome is PatternOutcome.CUE:
        assert step.symbol is not None
        ctx.cues.play((step.symbol,))
        for pad in content.pads:
            pad.color = pad.hover_color if pad.symbol == step.symbol else pad.unhover_color
    elif step.outcome is PatternOutcome.INPUT_OPEN:
        for pad in content.pads:
            pad.color = pad.unhover_color
            pad.disabled = False
        if content.prompt is not None:
            content.prompt.visible = False


def process_press(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    if ctx.scenes.current is not Scene.GAME:
        return
    if not (frame.pointer_released and ctx.engine.interactive):
        return

    content = ctx.scenes.content
    pad = first_hovered(content.pads)
    if pad is None or pad.symbol is None:
        return

    step = ctx.engine.press(pad.symbol)
    if step.outcome is PatternOutcome.CORRECT:
        ctx.cues.play((pad.symbol,))
    elif step.outcome is PatternOutcome.ADVANCED:
        ctx.cues.play((pad.symbol,))
        for p in content.pads:
            p.disabled = True
        if content.prompt is not None:
            content.prompt.visible = True
    elif step.outcome is PatternOutcome.FAILED:
        ctx.cues.play(ctx.engine.all_symbols())
        ctx.scenes.request(Scene.SCORE)


def process_scene_controls(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    if not frame.pointer_released or ctx.pointer is None:
        return
    for control in ctx.scenes.content.controls:
        if control.hoverable.is_hovered:
            logger.info("Requesting switch to %s", control.target.value)
            ctx.scenes.request(control.target)
            return


def apply_scene_transition(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    ctx.scenes.apply(ctx)


def handle_quit(ctx: GameContext, frame: FrameInput, dt: float) -> None:
    if frame.quit_requested:
        logger.info("Quit requested")
        ctx.running = False


STAGES: tuple[Stage, ...] = (
    refresh_pointer,
    update_hover,
    unhover_disabled,
    swap_hover_visuals,
    advance_playback,
    process_press,
    process_scene_controls,
    apply_scene_transition,
    handle_quit,
)


class FramePipeline:
    """Runs one ordered pass of all stages per frame.

    Frame deltas come from the injected clock; a long stall is clamped so a
    single frame cannot skip through several playback intervals.
    """

    _MAX_FRAME_DT_S = 0.50

    def __init__(self, ctx: GameContext, *, clock: Clock) -> None:
        self._ctx = ctx
        self._clock = clock
        self._last_now_s = clock.now()

    @property
    def context(self) -> GameContext:
        return self._ctx

    @property
    def running(self) -> bool:
        return self._ctx.running

    def step(self, frame: FrameInput) -> None:
        now = self._clock.now()
        dt = max(0.0, min(now - self._last_now_s, self._MAX_FRAME_DT_S))
        self._last_now_s = now

        for stage in STAGES:
            stage(self._ctx, frame, dt)
