from __future__ import annotations

import math

from panda3d.core import LVector3f

from jumpyball.common.geometry import AxisAlignedBox, Sphere
from jumpyball.physics.collision import Axis, dominant_axis, penetration, resolve
from jumpyball.physics.state import PlayerState

UNIT_BOX = AxisAlignedBox(-1.0, 1.0, -1.0, 1.0, -1.0, 1.0)


def _player(pos: LVector3f, vel: LVector3f | None = None, *, jump_count: int = 0) -> PlayerState:
    p = PlayerState.spawn(start=pos, radius=1.0)
    if vel is not None:
        p.vel = LVector3f(vel)
    p.jump_count = jump_count
    return p


def test_dominant_axis_ties_prefer_x_then_y() -> None:
    assert dominant_axis(LVector3f(1, 1, 0)) is Axis.X
    assert dominant_axis(LVector3f(1, 0, 1)) is Axis.X
    assert dominant_axis(LVector3f(-2, 1, 2)) is Axis.X
    assert dominant_axis(LVector3f(0, 1, 1)) is Axis.Y
    assert dominant_axis(LVector3f(0, -1, 3)) is Axis.Z


def test_penetration_none_when_apart() -> None:
    sphere = Sphere(center=LVector3f(0.0, 5.0, 0.0), radius=1.0)
    assert penetration(sphere, UNIT_BOX) is None


def test_resolve_outside_box_is_noop() -> None:
    p = _player(LVector3f(0.0, 5.0, 0.0), LVector3f(0.1, -0.2, 0.3), jump_count=2)
    resolve(p, UNIT_BOX)
    assert p.pos == LVector3f(0.0, 5.0, 0.0)
    assert p.vel == LVector3f(0.1, -0.2, 0.3)
    assert p.jump_count == 2


def test_resolve_center_inside_box_is_noop() -> None:
    p = _player(LVector3f(0.2, 0.3, 0.4), LVector3f(0.0, -0.1, 0.0), jump_count=1)
    resolve(p, UNIT_BOX)
    assert p.pos == LVector3f(0.2, 0.3, 0.4)
    assert p.jump_count == 1


def test_landing_on_top_face_pushes_up_and_grounds() -> None:
    p = _player(LVector3f(0.0, 1.9, 0.0), LVector3f(0.05, -0.3, 0.0), jump_count=2)
    resolve(p, UNIT_BOX)
    assert math.isclose(float(p.pos.y), 2.0, abs_tol=1e-5)
    assert float(p.vel.y) == 0.0
    # Only the resolved axis is touched.
    assert math.isclose(float(p.vel.x), 0.05, abs_tol=1e-7)
    assert p.jump_count == 0


def test_resting_exactly_on_top_face_still_lands() -> None:
    p = _player(LVector3f(0.0, 2.0, 0.0), LVector3f(0.0, -0.03, 0.0), jump_count=1)
    resolve(p, UNIT_BOX)
    assert math.isclose(float(p.pos.y), 2.0, abs_tol=1e-6)
    assert float(p.vel.y) == 0.0
    assert p.jump_count == 0


def test_resolve_is_idempotent_after_landing() -> None:
    p = _player(LVector3f(0.0, 1.9, 0.0), LVector3f(0.0, -0.3, 0.0))
    resolve(p, UNIT_BOX)
    y = float(p.pos.y)
    resolve(p, UNIT_BOX)
    assert math.isclose(float(p.pos.y), y, abs_tol=1e-5)


def test_side_contact_zeroes_horizontal_velocity_only() -> None:
    p = _player(LVector3f(1.5, 0.0, 0.0), LVector3f(-0.1, 0.2, 0.0), jump_count=1)
    resolve(p, UNIT_BOX)
    assert math.isclose(float(p.pos.x), 2.0, abs_tol=1e-5)
    assert float(p.vel.x) == 0.0
    assert math.isclose(float(p.vel.y), 0.2, abs_tol=1e-7)
    assert p.jump_count == 1


def test_diagonal_edge_contact_resolves_on_x() -> None:
    p = _player(LVector3f(1.5, 1.5, 0.0), LVector3f(-0.1, -0.1, 0.0), jump_count=2)
    resolve(p, UNIT_BOX)
    depth = 1.0 - math.sqrt(0.5)
    assert math.isclose(float(p.pos.x), 1.5 + depth * math.sqrt(0.5), abs_tol=1e-5)
    assert math.isclose(float(p.pos.y), 1.5, abs_tol=1e-7)
    assert float(p.vel.x) == 0.0
    assert math.isclose(float(p.vel.y), -0.1, abs_tol=1e-7)
    assert p.jump_count == 2


def test_ceiling_contact_pushes_down_and_resets_jumps() -> None:
    p = _player(LVector3f(0.0, -1.9, 0.0), LVector3f(0.0, 0.4, 0.0), jump_count=2)
    resolve(p, UNIT_BOX)
    assert math.isclose(float(p.pos.y), -2.0, abs_tol=1e-5)
    assert float(p.pos.x) == 0.0
    assert float(p.pos.z) == 0.0
    assert float(p.vel.y) == 0.0
    assert p.jump_count == 0
