from __future__ import annotations

from typing import List, Tuple

import pytest

from grid_rover.builder import RoverBuilder
from grid_rover.commands import Failure, compose, move_backward, move_forward, rotate_left, rotate_right
from grid_rover.directions import Orientation
from grid_rover.rover import Rover, RoverNotLanded
from grid_rover.sensors import CallableSensor


def make_rover(*sensors) -> Rover:
    builder = (
        RoverBuilder()
        .program_command("f", move_forward())
        .program_command("b", move_backward())
        .program_command("l", rotate_left())
        .program_command("r", rotate_right())
        .program_command("e", compose([rotate_right(), move_forward()]))
    )
    for sensor in sensors:
        builder.add_sensor(sensor)
    return builder.build()


def test_not_landed_rover_rejects_every_batch() -> None:
    rover = make_rover()
    for _ in range(3):
        with pytest.raises(RoverNotLanded):
            rover.execute("ffr")
        assert not rover.landed
        assert str(rover) == "unknown"


def test_not_landed_rejects_empty_batch() -> None:
    rover = make_rover()
    with pytest.raises(RoverNotLanded):
        rover.execute("")


def test_land_and_execute() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    assert str(rover) == "(0, 0) NORTH"

    assert rover.execute("ffrff") is None
    assert str(rover) == "(2, 2) EAST"
    assert not rover.stopped


def test_composite_binding() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("e")
    assert rover.state.position == (1, 0)
    assert rover.state.orientation is Orientation.EAST


def test_unrecognized_instruction_stops() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    assert rover.execute("q") is Failure.UNRECOGNIZED_INSTRUCTION
    assert rover.stopped
    assert str(rover) == "(0, 0) NORTH stopped"


def test_unrecognized_instruction_keeps_earlier_moves() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("f?ff")
    assert str(rover) == "(0, 1) NORTH stopped"


def test_blocked_batch_halts_immediately() -> None:
    queries: List[Tuple[int, int]] = []

    def safe(x: int, y: int) -> bool:
        queries.append((x, y))
        return (x, y) != (0, 1)

    rover = make_rover(CallableSensor(safe))
    rover.land((0, 0), Orientation.NORTH)
    assert rover.execute("ff") is Failure.UNSAFE_LOCATION
    assert rover.state.position == (0, 0)
    assert rover.stopped
    assert queries == [(0, 1)]


def test_rotation_after_block_is_not_applied() -> None:
    rover = make_rover(CallableSensor(lambda x, y: (x, y) != (0, 2)))
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("ffr")
    assert str(rover) == "(0, 1) NORTH stopped"


def test_stopped_is_cleared_by_next_batch() -> None:
    rover = make_rover(CallableSensor(lambda x, y: (x, y) != (0, 1)))
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("f")
    assert rover.stopped

    assert rover.execute("rf") is None
    assert str(rover) == "(1, 0) EAST"


def test_empty_batch_clears_stopped() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("x")
    assert rover.stopped
    rover.execute("")
    assert not rover.stopped


def test_relanding_overwrites_pose_and_clears_stopped() -> None:
    rover = make_rover()
    rover.land((0, 0), Orientation.NORTH)
    rover.execute("fx")
    assert rover.stopped

    rover.land((-3, 7), Orientation.WEST)
    assert str(rover) == "(-3, 7) WEST"
    rover.execute("b")
    assert str(rover) == "(-2, 7) WEST"


def test_state_property_is_a_copy() -> None:
    rover = make_rover()
    rover.land((1, 1), Orientation.SOUTH)
    snapshot = rover.state
    snapshot.position = (9, 9)
    assert rover.state.position == (1, 1)


def test_large_coordinates_do_not_wrap() -> None:
    rover = make_rover()
    big = 2**31 - 1
    rover.land((big, 0), Orientation.EAST)
    rover.execute("f")
    assert rover.state.position == (big + 1, 0)
