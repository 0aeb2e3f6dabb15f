from __future__ import annotations

from enum import IntEnum

from panda3d.core import LVector3f

from jumpyball.common.geometry import AxisAlignedBox, Sphere
from jumpyball.physics.state import JumpState, PlayerState


class Axis(IntEnum):
    X = 0
    Y = 1
    Z = 2


def dominant_axis(v: LVector3f) -> Axis:
    """Largest absolute component. X wins ties with Y and Z; Y wins ties with Z."""

    ax = abs(float(v.x))
    ay = abs(float(v.y))
    az = abs(float(v.z))
    if ax >= ay and ax >= az:
        return Axis.X
    if ay >= az:
        return Axis.Y
    return Axis.Z


def penetration(sphere: Sphere, box: AxisAlignedBox) -> tuple[LVector3f, LVector3f] | None:
    """
    Contact between a sphere and a box as `(direction, rest)`.

    `direction` points from the closest box point to the sphere center, `rest` is the
    push that moves the sphere back onto the box surface. Returns None when the sphere
    is farther than its radius, or when the center sits on the closest point itself
    (no usable direction).
    """

    closest = box.closest_point(sphere.center)
    offset = sphere.center - closest
    dist = float(offset.length())
    if dist <= 0.0 or dist > float(sphere.radius):
        return None
    direction = offset / dist
    return direction, direction * (float(sphere.radius) - dist)


def resolve(player: PlayerState, box: AxisAlignedBox) -> None:
    """
    Push the player out of `box` along a single axis.

    Only the dominant axis of the push is applied: that position coordinate moves by the
    matching `rest` component and the matching velocity component is zeroed. A vertical
    resolution is a ground/ceiling contact and resets the jump count.
    """

    contact = penetration(player.sphere(), box)
    if contact is None:
        return
    direction, rest = contact

    # `rest` is `direction` scaled by a non-negative depth, so both share the same ordering;
    # `direction` still picks an axis when the sphere only touches the face.
    axis = dominant_axis(direction)
    i = int(axis)
    player.pos[i] = float(player.pos[i]) + float(rest[i])
    player.vel[i] = 0.0
    if axis is Axis.Y:
        player.jump_count = int(JumpState.GROUNDED)
