from __future__ import annotations

import math

import pytest
from panda3d.core import LVector3f

from jumpyball.common.geometry import AxisAlignedBox
from jumpyball.course.level import Goal, Level
from jumpyball.game.input_system import InputSnapshot, KeyEdgeTracker
from jumpyball.game.world import World, advance, present

FLOOR = AxisAlignedBox(-10.0, 10.0, 0.0, 2.0, -10.0, 10.0)


def _two_levels() -> list[Level]:
    first = Level(
        name="first",
        boxes=(FLOOR,),
        start=LVector3f(0.0, 5.0, 0.0),
        goal=Goal(base_pos=LVector3f(0.0, 5.0, 0.0)),
        camera_distance=8.0,
    )
    second = Level(
        name="second",
        boxes=(FLOOR,),
        start=LVector3f(5.0, 5.0, 0.0),
        goal=Goal(base_pos=LVector3f(-5.0, 3.0, 5.0)),
        camera_distance=15.0,
    )
    return [first, second]


def test_create_requires_levels() -> None:
    with pytest.raises(ValueError):
        World.create(levels=[])


def test_create_uses_first_level_camera_distance() -> None:
    world = World.create(levels=_two_levels())
    assert world.level.name == "first"
    assert world.camera.distance == 8.0
    assert world.player.pos == LVector3f(0.0, 5.0, 0.0)


def test_advance_then_present() -> None:
    levels = _two_levels()
    levels[0] = Level(name="solo", boxes=(FLOOR,), start=LVector3f(0.0, 5.0, 0.0))
    world = World.create(levels=levels)

    advance(world, InputSnapshot(keys_down=frozenset({"w"})))
    frame = present(world)

    assert frame.tick == 1
    assert frame.level_name == "solo"
    assert math.isclose(float(frame.player.pos.z), 0.1, abs_tol=1e-5)
    assert math.isclose(float(frame.player.pos.y), 4.97, abs_tol=1e-5)
    assert frame.player.scale == 1.0
    assert frame.boxes == (FLOOR,)
    assert frame.goal_pos is None
    assert math.isclose(float((frame.camera.eye - frame.camera.at).length()), 10.0, abs_tol=1e-4)


def test_goal_transition_moves_player_and_camera() -> None:
    world = World.create(levels=_two_levels())

    advance(world, InputSnapshot())
    frame = present(world)

    assert frame.level_name == "second"
    assert world.levels.completed == 1
    assert world.player.pos == LVector3f(5.0, 5.0, 0.0)
    assert world.camera.distance == 15.0
    assert frame.goal_pos is not None
    assert frame.goal_model == "models/box"


def test_jump_fires_once_per_press() -> None:
    levels = [Level(name="solo", boxes=(FLOOR,), start=LVector3f(0.0, 3.0, 0.0))]
    world = World.create(levels=levels)
    edges = KeyEdgeTracker()

    advance(world, edges.snapshot(keys_down={"space"}))
    assert world.player.jump_count == 1
    advance(world, edges.snapshot(keys_down={"space"}))
    assert world.player.jump_count == 1
    advance(world, edges.snapshot(keys_down=()))
    advance(world, edges.snapshot(keys_down={"space"}))
    assert world.player.jump_count == 2
