"""Per-shape pointer hover tracking with one-frame enter/exit edges."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .geometry import RectShape, Shape, Transform, TriangleShape, Vec2, shape_contains

Color = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class HoverEdges:
    is_hovered: bool
    just_hovered: bool
    just_unhovered: bool


def hover_edges(previous: bool, current: bool) -> HoverEdges:
    """Edge flags for one frame given the previous and current hover state."""

    if previous == current:
        return HoverEdges(is_hovered=current, just_hovered=False, just_unhovered=False)
    return HoverEdges(is_hovered=current, just_hovered=current, just_unhovered=not current)


@dataclass(slots=True)
class HoverTracker:
    shape: Shape
    is_hovered: bool = False
    is_just_hovered: bool = False
    is_just_unhovered: bool = False

    @classmethod
    def from_rect(cls, width: float, height: float) -> HoverTracker:
        return cls(shape=RectShape.from_size(width, height))

    @classmethod
    def from_triangle(cls, a: Vec2, b: Vec2, c: Vec2) -> HoverTracker:
        return cls(shape=TriangleShape(a, b, c))

    def set_hovered(self, hovered: bool) -> None:
        edges = hover_edges(self.is_hovered, bool(hovered))
        self.is_hovered = edges.is_hovered
        self.is_just_hovered = edges.just_hovered
        self.is_just_unhovered = edges.just_unhovered


@dataclass(slots=True)
class Hoverable:
    """A shape-bearing scene entity the pointer can hover.

    ``color`` is what the presentation layer draws (``None`` means invisible);
    ``hover_color``/``unhover_color`` are the variants swapped in on the
    enter/exit edges. ``symbol`` is set only on pattern input pads.
    """

    tracker: HoverTracker
    transform: Transform = field(default_factory=Transform)
    disabled: bool = False
    color: Color | None = None
    hover_color: Color | None = None
    unhover_color: Color | None = None
    symbol: int | None = None

    @property
    def is_hovered(self) -> bool:
        return self.tracker.is_hovered

    def contains(self, world: Vec2) -> bool:
        local = self.transform.inverse_apply(world)
        return shape_contains(self.tracker.shape, local)


def update_hover_state(items: Iterable[Hoverable], pointer: Vec2 | None) -> None:
    """Recompute hover for every enabled item; no pointer means nothing is hovered."""

    for item in items:
        if item.disabled:
            continue
        item.tracker.set_hovered(pointer is not None and item.contains(pointer))


def force_unhover_disabled(items: Iterable[Hoverable]) -> None:
    for item in items:
        if item.disabled:
            item.tracker.set_hovered(False)


def apply_hover_visuals(items: Iterable[Hoverable]) -> None:
    for item in items:
        if item.tracker.is_just_hovered and item.hover_color is not None:
            item.color = item.hover_color
        if item.tracker.is_just_unhovered and item.unhover_color is not None:
            item.color = item.unhover_color


def first_hovered(items: Iterable[Hoverable]) -> Hoverable | None:
    # Declaration order breaks ties between overlapping shapes.
    for item in items:
        if item.tracker.is_hovered:
            return item
    return None
