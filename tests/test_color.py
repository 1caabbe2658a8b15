import dataclasses

import pytest

from arpgkit import color
from arpgkit.color import Color


def test_default_is_opaque_black():
    c = Color()
    assert (c.r, c.g, c.b, c.a) == (0, 0, 0, 255)
    assert c == color.BLACK


def test_named_constants():
    assert color.WHITE == Color(255, 255, 255, 255)
    assert color.TRANSPARENT.a == 0
    assert color.YELLOW == Color(255, 255, 0)
    assert color.CYAN == Color(0, 255, 255)


def test_with_alpha_keeps_rgb():
    c = color.RED.with_alpha(128)
    assert (c.r, c.g, c.b, c.a) == (255, 0, 0, 128)
    assert color.RED.a == 255


def test_frozen():
    c = Color(10, 20, 30)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.r = 0  # type: ignore[misc]
    assert c.r == 10


@pytest.mark.parametrize("kwargs", [{"r": 256}, {"g": -1}, {"a": 300}])
def test_out_of_range_channel_rejected(kwargs):
    with pytest.raises(ValueError):
        Color(**kwargs)


def test_hashable_and_equal():
    assert len({Color(1, 2, 3), Color(1, 2, 3), Color(1, 2, 4)}) == 2