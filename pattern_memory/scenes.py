"""Scene values, per-scene content arenas and the scene state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from .geometry import Vec2
from .hover import Hoverable

if TYPE_CHECKING:
    from .pipeline import GameContext

logger = logging.getLogger(__name__)


class Scene(StrEnum):
    STARTUP = "startup"
    CLICK_TO_START = "click_to_start"
    MAIN_MENU = "main_menu"
    GAME = "game"
    SCORE = "score"
    CREDITS = "credits"


@dataclass(slots=True)
class Label:
    text: str
    position: Vec2
    size: int = 60
    anchor: str = "center"  # "center" | "bottomleft"
    visible: bool = True


@dataclass(frozen=True, slots=True)
class SceneChangeControl:
    hoverable: Hoverable
    target: Scene


@dataclass(slots=True)
class SceneContent:
    """Everything owned by the active scene; rebuilt on every transition.

    ``shapes`` lists every hoverable in declaration order, including the
    ones referenced from ``controls`` and ``pads``.
    """

    shapes: list[Hoverable] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
    controls: list[SceneChangeControl] = field(default_factory=list)
    pads: list[Hoverable] = field(default_factory=list)
    prompt: Label | None = None

    def add_shape(self, item: Hoverable) -> Hoverable:
        self.shapes.append(item)
        return item

    def add_label(self, label: Label) -> Label:
        self.labels.append(label)
        return label

    def add_control(self, item: Hoverable, target: Scene) -> SceneChangeControl:
        if not any(shape is item for shape in self.shapes):
            self.shapes.append(item)
        control = SceneChangeControl(hoverable=item, target=target)
        self.controls.append(control)
        return control

    def add_pad(self, item: Hoverable) -> Hoverable:
        if item.symbol is None:
            raise ValueError("pattern pads need a symbol")
        self.shapes.append(item)
        self.pads.append(item)
        return item

    def clear(self) -> None:
        self.shapes.clear()
        self.labels.clear()
        self.controls.clear()
        self.pads.clear()
        self.prompt = None


SceneSetup = Callable[["GameContext"], SceneContent]


class SceneMachine:
    """Holds the current and requested scene and applies transitions.

    Requests only record the target; ``apply`` performs at most one
    teardown/setup cycle per call no matter how many requests came in.
    """

    def __init__(
        self,
        *,
        setup_for: Callable[[Scene], SceneSetup | None],
        initial: Scene = Scene.STARTUP,
        requested: Scene = Scene.CLICK_TO_START,
    ) -> None:
        self._setup_for = setup_for
        self._current = initial
        self._requested = requested
        self._content = SceneContent()

    @property
    def current(self) -> Scene:
        return self._current

    @property
    def requested(self) -> Scene:
        return self._requested

    @property
    def content(self) -> SceneContent:
        return self._content

    @property
    def pending(self) -> bool:
        return self._requested != self._current

    def request(self, scene: Scene) -> None:
        self._requested = scene

    def apply(self, ctx: GameContext) -> bool:
        if not self.pending:
            return False

        scene = self._requested
        logger.info("Switching to %s", scene.value)

        self._content.clear()
        self._current = scene

        setup = self._setup_for(scene)
        if setup is None:
            logger.info("Scene %s has no setup routine; entering it empty", scene.value)
            self._content = SceneContent()
        else:
            self._content = setup(ctx)
        return True
