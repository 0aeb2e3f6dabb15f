from __future__ import annotations

import math
from dataclasses import dataclass

from panda3d.core import LVector3f


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(frozen=True)
class Sphere:
    """Collision sphere built from the player for a single test; never stored."""

    center: LVector3f
    radius: float

    def __post_init__(self) -> None:
        if not float(self.radius) > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius!r}")


@dataclass(frozen=True)
class AxisAlignedBox:
    """
    Static level volume in world space.

    Field order matches one line of a box file: min_x max_x min_y max_y min_z max_z.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    def __post_init__(self) -> None:
        for axis, lo, hi in (
            ("x", self.min_x, self.max_x),
            ("y", self.min_y, self.max_y),
            ("z", self.min_z, self.max_z),
        ):
            if not (math.isfinite(float(lo)) and math.isfinite(float(hi))):
                raise ValueError(f"Box bounds on {axis} must be finite, got ({lo!r}, {hi!r})")
            if float(lo) > float(hi):
                raise ValueError(f"Box min_{axis}={lo} exceeds max_{axis}={hi}")

    @property
    def minimum(self) -> LVector3f:
        return LVector3f(self.min_x, self.min_y, self.min_z)

    @property
    def maximum(self) -> LVector3f:
        return LVector3f(self.max_x, self.max_y, self.max_z)

    def size(self) -> LVector3f:
        return self.maximum - self.minimum

    def closest_point(self, point: LVector3f) -> LVector3f:
        """Clamp each coordinate of `point` into this box."""

        return LVector3f(
            _clamp(float(point.x), self.min_x, self.max_x),
            _clamp(float(point.y), self.min_y, self.max_y),
            _clamp(float(point.z), self.min_z, self.max_z),
        )

    def as_row(self) -> tuple[float, float, float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y, self.min_z, self.max_z)


def box_centered(*, center: LVector3f, half_x: float, half_y: float, half_z: float) -> AxisAlignedBox:
    cx, cy, cz = float(center.x), float(center.y), float(center.z)
    return AxisAlignedBox(
        min_x=cx - float(half_x),
        max_x=cx + float(half_x),
        min_y=cy - float(half_y),
        max_y=cy + float(half_y),
        min_z=cz - float(half_z),
        max_z=cz + float(half_z),
    )


def sphere_box_distance(sphere: Sphere, box: AxisAlignedBox) -> float:
    """Distance from the sphere center to the nearest point of the box (0 when inside)."""

    return float((box.closest_point(sphere.center) - sphere.center).length())


def sphere_touches_box(sphere: Sphere, box: AxisAlignedBox) -> bool:
    return sphere_box_distance(sphere, box) <= float(sphere.radius)


def rotate_x(v: LVector3f, angle: float) -> LVector3f:
    """Rotate around +X by `angle` radians (positive angles rotate +Y toward +Z)."""

    c = math.cos(angle)
    s = math.sin(angle)
    return LVector3f(
        float(v.x),
        float(v.y) * c - float(v.z) * s,
        float(v.y) * s + float(v.z) * c,
    )


def rotate_y(v: LVector3f, angle: float) -> LVector3f:
    """Rotate around +Y by `angle` radians (positive angles rotate +Z toward +X)."""

    c = math.cos(angle)
    s = math.sin(angle)
    return LVector3f(
        float(v.x) * c + float(v.z) * s,
        float(v.y),
        -float(v.x) * s + float(v.z) * c,
    )
