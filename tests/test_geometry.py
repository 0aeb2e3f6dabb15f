from __future__ import annotations

import math

import pytest
from panda3d.core import LVector3f

from jumpyball.common.geometry import (
    AxisAlignedBox,
    Sphere,
    box_centered,
    rotate_x,
    rotate_y,
    sphere_box_distance,
    sphere_touches_box,
)


def _close(a: LVector3f, b: LVector3f, tol: float = 1e-5) -> bool:
    return all(math.isclose(float(a[i]), float(b[i]), abs_tol=tol) for i in range(3))


def test_box_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        AxisAlignedBox(1.0, 0.0, 0.0, 1.0, 0.0, 1.0)


def test_box_accepts_flat_box() -> None:
    box = AxisAlignedBox(0.0, 1.0, 2.0, 2.0, 0.0, 1.0)
    assert float(box.size().y) == 0.0


def test_sphere_rejects_non_positive_radius() -> None:
    with pytest.raises(ValueError):
        Sphere(center=LVector3f(0, 0, 0), radius=0.0)


def test_closest_point_clamps_per_axis() -> None:
    box = AxisAlignedBox(-1.0, 1.0, -1.0, 1.0, -1.0, 1.0)
    assert _close(box.closest_point(LVector3f(5.0, 0.5, -3.0)), LVector3f(1.0, 0.5, -1.0))
    assert _close(box.closest_point(LVector3f(0.2, 0.3, 0.4)), LVector3f(0.2, 0.3, 0.4))


def test_box_centered_spans_half_extents() -> None:
    box = box_centered(center=LVector3f(1.0, 2.0, 3.0), half_x=0.5, half_y=1.0, half_z=0.5)
    assert box.as_row() == (0.5, 1.5, 1.0, 3.0, 2.5, 3.5)


def test_sphere_touching_face_counts_as_contact() -> None:
    box = AxisAlignedBox(-1.0, 1.0, -1.0, 1.0, -1.0, 1.0)
    touching = Sphere(center=LVector3f(0.0, 2.0, 0.0), radius=1.0)
    apart = Sphere(center=LVector3f(0.0, 2.5, 0.0), radius=1.0)
    assert math.isclose(sphere_box_distance(touching, box), 1.0)
    assert sphere_touches_box(touching, box)
    assert not sphere_touches_box(apart, box)


def test_rotations_follow_right_hand_rule() -> None:
    assert _close(rotate_y(LVector3f(0, 0, 1), math.pi / 2.0), LVector3f(1, 0, 0))
    assert _close(rotate_x(LVector3f(0, 1, 0), math.pi / 2.0), LVector3f(0, 0, 1))


def test_size_spans_minimum_to_maximum() -> None:
    box = AxisAlignedBox(-1.0, 3.0, 0.0, 2.0, 5.0, 5.5)
    assert _close(box.minimum, LVector3f(-1.0, 0.0, 5.0))
    assert _close(box.maximum, LVector3f(3.0, 2.0, 5.5))
    assert _close(box.size(), LVector3f(4.0, 2.0, 0.5))
