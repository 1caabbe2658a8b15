"""Debug shapes (lines, boxes, polygons, circles) built into line batches."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Sequence, TypeVar

from .color import WHITE, Color
from .vertices import Vector2, Vertex

__all__ = [
    "MAX_POLYGON_VERTICES",
    "CIRCLE_SUBDIVISIONS",
    "Primitive",
    "ViewBounds",
    "ShapeBatch",
    "ShapeRenderer",
]

MAX_POLYGON_VERTICES = 8
CIRCLE_SUBDIVISIONS = 32
_ANGLE_STEP = 6.283185307 / CIRCLE_SUBDIVISIONS


class Primitive(Enum):
    LINE_LIST = auto()
    LINE_STRIP = auto()
    TRIANGLE_LIST = auto()
    TRIANGLE_STRIP = auto()


@dataclass
class ViewBounds:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0


@dataclass
class ShapeBatch:
    primitive: Primitive
    vertex_count: int = 0
    vertex_offset: int = 0


@dataclass
class _Line:
    p1: Vector2
    p2: Vector2
    color: Color
    lifetime: float


@dataclass
class _Box:
    min: Vector2
    max: Vector2
    color: Color
    lifetime: float


@dataclass
class _Polygon:
    points: list[Vector2] = field(default_factory=list)
    color: Color = WHITE
    lifetime: float = 0.0


@dataclass
class _Circle:
    center: Vector2
    radius: float
    color: Color
    lifetime: float


def _cull_line(bounds: ViewBounds, p1: Vector2, p2: Vector2) -> bool:
    return (
        (p1.x < bounds.min_x and p2.x < bounds.min_x)
        or (p1.x > bounds.max_x and p2.x > bounds.max_x)
        or (p1.y < bounds.min_y and p2.y < bounds.min_y)
        or (p1.y > bounds.max_y and p2.y > bounds.max_y)
    )


def _cull_box(bounds: ViewBounds, lo: Vector2, hi: Vector2) -> bool:
    return hi.x < bounds.min_x or lo.x > bounds.max_x or hi.y < bounds.min_y or lo.y > bounds.max_y


def _cull_polygon(bounds: ViewBounds, points: Sequence[Vector2]) -> bool:
    if len(points) < 3:
        return True
    lo = Vector2(min(p.x for p in points), min(p.y for p in points))
    hi = Vector2(max(p.x for p in points), max(p.y for p in points))
    return _cull_box(bounds, lo, hi)


def _cull_circle(bounds: ViewBounds, center: Vector2, radius: float) -> bool:
    return (
        center.x + radius < bounds.min_x
        or center.x - radius > bounds.max_x
        or center.y + radius < bounds.min_y
        or center.y - radius > bounds.max_y
    )


_S = TypeVar("_S", _Line, _Box, _Polygon, _Circle)


def _age(shapes: list[_S], dt: float) -> None:
    """Decrease lifetimes and drop expired shapes by swapping in the last one."""
    size = len(shapes)
    for i in reversed(range(len(shapes))):
        shapes[i].lifetime -= dt
        if shapes[i].lifetime > 0.0:
            continue
        size -= 1
        shapes[i] = shapes[size]
    del shapes[size:]


class ShapeRenderer:
    """Collects debug shapes and turns them into line vertices and batches.

    Culling of newly added zero-lifetime shapes uses the view bounds of the
    previous ``draw_all`` call, so it lags one frame behind.
    """

    def __init__(self) -> None:
        self.view_bounds = ViewBounds()
        self._lines: list[_Line] = []
        self._boxes: list[_Box] = []
        self._polygons: list[_Polygon] = []
        self._circles: list[_Circle] = []

    def __len__(self) -> int:
        return len(self._lines) + len(self._boxes) + len(self._polygons) + len(self._circles)

    def update_lifetimes(self, dt: float) -> None:
        """Age every shape by dt and remove the ones whose lifetime ran out."""
        for shapes in (self._lines, self._boxes, self._polygons, self._circles):
            _age(shapes, dt)

    def draw_all(self, camera_min: Vector2, camera_max: Vector2) -> tuple[list[Vertex], list[ShapeBatch]]:
        """Build vertices and batches for all shapes visible in the camera rectangle."""
        bounds = ViewBounds(camera_min.x, camera_min.y, camera_max.x, camera_max.y)
        self.view_bounds = bounds
        vertices: list[Vertex] = []
        batches: list[ShapeBatch] = []

        if self._lines:
            batch = ShapeBatch(Primitive.LINE_LIST, vertex_offset=len(vertices))
            batches.append(batch)
            for line in self._lines:
                if _cull_line(bounds, line.p1, line.p2):
                    continue
                vertices.append(Vertex(line.p1, line.color))
                vertices.append(Vertex(line.p2, line.color))
                batch.vertex_count += 2

        for box in self._boxes:
            if _cull_box(bounds, box.min, box.max):
                continue
            corners = [
                Vector2(box.min.x, box.min.y),
                Vector2(box.max.x, box.min.y),
                Vector2(box.max.x, box.max.y),
                Vector2(box.min.x, box.max.y),
            ]
            self._add_closed_strip(vertices, batches, corners, box.color)

        for polygon in self._polygons:
            if _cull_polygon(bounds, polygon.points):
                continue
            self._add_closed_strip(vertices, batches, polygon.points, polygon.color)

        for circle in self._circles:
            if _cull_circle(bounds, circle.center, circle.radius):
                continue
            ring = [
                circle.center
                + circle.radius * Vector2(math.cos(i * _ANGLE_STEP), math.sin(i * _ANGLE_STEP))
                for i in range(CIRCLE_SUBDIVISIONS)
            ]
            self._add_closed_strip(vertices, batches, ring, circle.color)

        return vertices, batches

    @staticmethod
    def _add_closed_strip(
        vertices: list[Vertex], batches: list[ShapeBatch], points: Sequence[Vector2], color: Color
    ) -> None:
        offset = len(vertices)
        vertices.extend(Vertex(p, color) for p in points)
        vertices.append(vertices[offset])
        batches.append(ShapeBatch(Primitive.LINE_STRIP, len(points) + 1, offset))

    def add_line(self, p1: Vector2, p2: Vector2, color: Color = WHITE, lifetime: float = 0.0) -> None:
        if lifetime <= 0.0 and _cull_line(self.view_bounds, p1, p2):
            return
        self._lines.append(_Line(p1, p2, color, lifetime))

    def add_box(
        self, min_corner: Vector2, max_corner: Vector2, color: Color = WHITE, lifetime: float = 0.0
    ) -> None:
        if lifetime <= 0.0 and _cull_box(self.view_bounds, min_corner, max_corner):
            return
        self._boxes.append(_Box(min_corner, max_corner, color, lifetime))

    def add_polygon(self, points: Sequence[Vector2], color: Color = WHITE, lifetime: float = 0.0) -> None:
        """Add a closed polygon; extra points past the maximum are dropped."""
        kept = list(points[:MAX_POLYGON_VERTICES])
        if len(kept) < 3:
            return
        if lifetime <= 0.0 and _cull_polygon(self.view_bounds, kept):
            return
        self._polygons.append(_Polygon(kept, color, lifetime))

    def add_circle(self, center: Vector2, radius: float, color: Color = WHITE, lifetime: float = 0.0) -> None:
        if lifetime <= 0.0 and _cull_circle(self.view_bounds, center, radius):
            return
        self._circles.append(_Circle(center, radius, color, lifetime))