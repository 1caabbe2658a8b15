import pytest

from arpgkit.color import RED, WHITE
from arpgkit.vertices import Vector2, Vertex


def test_add_componentwise():
    assert Vector2(1.0, 2.0) + Vector2(3.0, 4.0) == Vector2(4.0, 6.0)


def test_sub_inverts_add():
    a = Vector2(1.5, -2.0)
    b = Vector2(0.25, 7.0)
    assert (a + b) - b == a


def test_mul_and_rmul_agree():
    v = Vector2(2.0, -3.0)
    assert v * 2.0 == 2.0 * v
    assert (v * 2.0).x == v.x * 2.0


def test_mul_rejects_vector():
    with pytest.raises(TypeError):
        Vector2(1.0, 1.0) * Vector2(1.0, 1.0)


def test_neg():
    v = Vector2(3.0, -4.0)
    assert v + (-v) == Vector2()


def test_vector_is_immutable():
    v = Vector2(1.0, 1.0)
    with pytest.raises(AttributeError):
        v.x = 5.0
    assert v == Vector2(1.0, 1.0)


def test_vertex_defaults():
    vertex = Vertex(Vector2(1.0, 2.0))
    assert vertex.color == WHITE
    assert vertex.tex_coord == Vector2(0.0, 0.0)


def test_vertex_equality():
    assert Vertex(Vector2(1.0, 1.0), RED) == Vertex(Vector2(1.0, 1.0), RED)
    assert Vertex(Vector2(1.0, 1.0), RED) != Vertex(Vector2(1.0, 1.0), WHITE)