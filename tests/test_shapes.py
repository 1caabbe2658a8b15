import math

import pytest

from arpgkit.color import RED
from arpgkit.shapes import (
    CIRCLE_SUBDIVISIONS,
    MAX_POLYGON_VERTICES,
    Primitive,
    ShapeRenderer,
    ViewBounds,
)
from arpgkit.vertices import Vector2

CAM_MIN = Vector2(0.0, 0.0)
CAM_MAX = Vector2(100.0, 100.0)


@pytest.fixture
def renderer():
    r = ShapeRenderer()
    r.draw_all(CAM_MIN, CAM_MAX)
    return r


def test_draw_all_records_view_bounds():
    r = ShapeRenderer()
    r.draw_all(Vector2(-1.0, -2.0), Vector2(3.0, 4.0))
    assert r.view_bounds == ViewBounds(-1.0, -2.0, 3.0, 4.0)


def test_empty_draw():
    assert ShapeRenderer().draw_all(CAM_MIN, CAM_MAX) == ([], [])


def test_line_batch(renderer):
    renderer.add_line(Vector2(10.0, 10.0), Vector2(20.0, 30.0), RED)
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert batches[0].primitive is Primitive.LINE_LIST
    assert batches[0].vertex_count == len(vertices)
    assert [v.position for v in vertices] == [Vector2(10.0, 10.0), Vector2(20.0, 30.0)]
    assert all(v.color == RED for v in vertices)


def test_zero_lifetime_offscreen_line_is_not_added(renderer):
    renderer.add_line(Vector2(200.0, 10.0), Vector2(300.0, 10.0))
    assert len(renderer) == 0


def test_persistent_offscreen_line_is_kept_but_culled(renderer):
    renderer.add_line(Vector2(200.0, 10.0), Vector2(300.0, 10.0), lifetime=1.0)
    assert len(renderer) == 1
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert vertices == []
    assert batches[0].vertex_count == 0


def test_box_is_closed_strip(renderer):
    renderer.add_box(Vector2(10.0, 20.0), Vector2(30.0, 40.0))
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert batches[0].primitive is Primitive.LINE_STRIP
    assert batches[0].vertex_count == 5
    assert vertices[0] == vertices[-1]
    positions = {v.position for v in vertices}
    assert positions == {
        Vector2(10.0, 20.0),
        Vector2(30.0, 20.0),
        Vector2(30.0, 40.0),
        Vector2(10.0, 40.0),
    }


def test_polygon_truncated_and_closed(renderer):
    points = [Vector2(10.0 + i, 10.0 + (i % 2) * 5.0) for i in range(MAX_POLYGON_VERTICES + 4)]
    renderer.add_polygon(points)
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert batches[0].vertex_count == MAX_POLYGON_VERTICES + 1
    assert [v.position for v in vertices[:-1]] == points[:MAX_POLYGON_VERTICES]
    assert vertices[-1] == vertices[0]


def test_polygon_needs_three_points(renderer):
    renderer.add_polygon([Vector2(10.0, 10.0), Vector2(20.0, 20.0)], lifetime=5.0)
    assert len(renderer) == 0


def test_circle_vertices_lie_on_circle(renderer):
    center = Vector2(50.0, 50.0)
    renderer.add_circle(center, 10.0)
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert batches[0].vertex_count == CIRCLE_SUBDIVISIONS + 1
    for v in vertices:
        d = v.position - center
        assert math.hypot(d.x, d.y) == pytest.approx(10.0, rel=1e-6)
    assert vertices[-1] == vertices[0]


def test_circle_culling(renderer):
    renderer.add_circle(Vector2(-20.0, 50.0), 5.0)
    renderer.add_circle(Vector2(-3.0, 50.0), 5.0)
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert len(batches) == 1
    assert len(renderer) == 1


def test_batch_offsets_are_consistent(renderer):
    renderer.add_line(Vector2(1.0, 1.0), Vector2(2.0, 2.0))
    renderer.add_box(Vector2(5.0, 5.0), Vector2(6.0, 6.0))
    renderer.add_circle(Vector2(50.0, 50.0), 3.0)
    vertices, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    offset = 0
    for batch in batches:
        assert batch.vertex_offset == offset
        offset += batch.vertex_count
    assert offset == len(vertices)


def test_update_lifetimes_removes_expired(renderer):
    renderer.add_line(Vector2(1.0, 1.0), Vector2(2.0, 2.0))
    renderer.add_box(Vector2(5.0, 5.0), Vector2(6.0, 6.0), lifetime=1.0)
    renderer.add_circle(Vector2(50.0, 50.0), 3.0, lifetime=0.25)
    renderer.update_lifetimes(0.5)
    assert len(renderer) == 1
    _, batches = renderer.draw_all(CAM_MIN, CAM_MAX)
    assert [b.primitive for b in batches] == [Primitive.LINE_STRIP]
    renderer.update_lifetimes(0.5)
    assert len(renderer) == 0


def test_update_lifetimes_keeps_survivors(renderer):
    for i in range(5):
        renderer.add_line(Vector2(1.0, 1.0), Vector2(2.0, 2.0 + i), lifetime=1.0 if i % 2 else 0.1)
    renderer.update_lifetimes(0.5)
    vertices, _ = renderer.draw_all(CAM_MIN, CAM_MAX)
    ends = sorted(v.position.y for v in vertices[1::2])
    assert ends == [3.0, 5.0]