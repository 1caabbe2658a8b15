import pytest

from arpgkit.handle import Handle


def test_default_handle_is_invalid():
    h = Handle()
    assert (h.index, h.generation) == (0, 0)
    assert h.is_valid() is False


def test_handle_with_generation_is_valid():
    assert Handle(0, 1).is_valid() is True


def test_equality_and_hash():
    assert Handle(3, 1) == Handle(3, 1)
    assert Handle(3, 1) != Handle(3, 2)
    assert len({Handle(3, 1), Handle(3, 1), Handle(4, 1)}) == 2


def test_ordering_compares_index_then_generation():
    assert Handle(1, 9) < Handle(2, 1)
    assert Handle(2, 1) < Handle(2, 3)
    assert sorted([Handle(2, 3), Handle(1, 5), Handle(2, 1)]) == [
        Handle(1, 5),
        Handle(2, 1),
        Handle(2, 3),
    ]


def test_immutable():
    with pytest.raises(AttributeError):
        Handle().index = 5  # type: ignore[misc]