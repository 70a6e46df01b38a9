"""2D geometry for pointer hit-testing.

Shapes are described in their own local frame; a ``Transform`` places them
in world space. Hit tests run in the local frame after mapping the pointer
through the inverse transform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Vec2:
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)


ORIGIN = Vec2(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Transform:
    """Scale, then rotate (radians, counter-clockwise), then translate."""

    translation: Vec2 = ORIGIN
    rotation: float = 0.0
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))

    def __post_init__(self) -> None:
        if self.scale.x == 0.0 or self.scale.y == 0.0:
            raise ValueError("scale components must be non-zero")

    @classmethod
    def from_xy(cls, x: float, y: float) -> Transform:
        return cls(translation=Vec2(float(x), float(y)))

    def apply(self, p: Vec2) -> Vec2:
        sx = p.x * self.scale.x
        sy = p.y * self.scale.y
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        return Vec2(sx * c - sy * s + self.translation.x, sx * s + sy * c + self.translation.y)

    def inverse_apply(self, p: Vec2) -> Vec2:
        dx = p.x - self.translation.x
        dy = p.y - self.translation.y
        c = math.cos(self.rotation)
        s = math.sin(self.rotation)
        rx = dx * c + dy * s
        ry = -dx * s + dy * c
        return Vec2(rx / self.scale.x, ry / self.scale.y)


@dataclass(frozen=True, slots=True)
class RectShape:
    """Axis-aligned rectangle centred on the local origin."""

    half_width: float
    half_height: float

    @classmethod
    def from_size(cls, width: float, height: float) -> RectShape:
        return cls(half_width=float(width) / 2.0, half_height=float(height) / 2.0)

    def corners(self) -> tuple[Vec2, Vec2, Vec2, Vec2]:
        hw = self.half_width
        hh = self.half_height
        return (Vec2(-hw, -hh), Vec2(hw, -hh), Vec2(hw, hh), Vec2(-hw, hh))


@dataclass(frozen=True, slots=True)
class TriangleShape:
    a: Vec2
    b: Vec2
    c: Vec2

    def corners(self) -> tuple[Vec2, Vec2, Vec2]:
        return (self.a, self.b, self.c)


Shape = RectShape | TriangleShape


def point_in_rect(p: Vec2, rect: RectShape) -> bool:
    # Inclusive on every edge.
    return (
        -rect.half_width <= p.x <= rect.half_width
        and -rect.half_height <= p.y <= rect.half_height
    )


def point_in_triangle(p: Vec2, a: Vec2, b: Vec2, c: Vec2) -> bool:
    """Barycentric test; points on an edge are outside.

    Zero-area triangles contain no points.
    """
    area = (b.y - c.y) * (a.x - c.x) + (c.x - b.x) * (a.y - c.y)
    if area == 0.0:
        return False
    inv_area = 1.0 / area

    bary_a = ((b.y - c.y) * (p.x - c.x) + (c.x - b.x) * (p.y - c.y)) * inv_area
    bary_b = ((c.y - a.y) * (p.x - c.x) + (a.x - c.x) * (p.y - c.y)) * inv_area
    bary_c = 1.0 - bary_a - bary_b

    return bary_a > 0.0 and bary_b > 0.0 and bary_c > 0.0


def shape_contains(shape: Shape, local: Vec2) -> bool:
    if isinstance(shape, RectShape):
        return point_in_rect(local, shape)
    return point_in_triangle(local, shape.a, shape.b, shape.c)
