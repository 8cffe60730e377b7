from __future__ import annotations

import pytest

from grid_rover.directions import Orientation


def test_rotations_are_inverse() -> None:
    for o in Orientation:
        assert o.rotate_right().rotate_left() is o
        assert o.rotate_left().rotate_right() is o


def test_four_right_turns_return_to_start() -> None:
    for o in Orientation:
        turned = o
        for _ in range(4):
            turned = turned.rotate_right()
        assert turned is o


def test_clockwise_cycle() -> None:
    assert Orientation.NORTH.rotate_right() is Orientation.EAST
    assert Orientation.EAST.rotate_right() is Orientation.SOUTH
    assert Orientation.SOUTH.rotate_right() is Orientation.WEST
    assert Orientation.WEST.rotate_right() is Orientation.NORTH
    assert Orientation.NORTH.rotate_left() is Orientation.WEST


def test_displacements_are_unit_vectors() -> None:
    assert Orientation.NORTH.displacement() == (0, 1)
    assert Orientation.EAST.displacement() == (1, 0)
    assert Orientation.SOUTH.displacement() == (0, -1)
    assert Orientation.WEST.displacement() == (-1, 0)


def test_parse_accepts_names_and_letters() -> None:
    assert Orientation.parse("north") is Orientation.NORTH
    assert Orientation.parse(" West ") is Orientation.WEST
    assert Orientation.parse("e") is Orientation.EAST
    with pytest.raises(ValueError):
        Orientation.parse("up")
