from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from panda3d.core import LQuaternionf, LVector3f

from jumpyball.common.geometry import Sphere

MAX_JUMP_COUNT = 2


class JumpState(IntEnum):
    GROUNDED = 0
    SINGLE = 1
    DOUBLE = 2


def _identity_quat() -> LQuaternionf:
    return LQuaternionf(1.0, 0.0, 0.0, 0.0)


@dataclass
class PlayerState:
    pos: LVector3f
    vel: LVector3f
    radius: float
    jump_count: int = 0
    # Visual only: accumulated rolling rotation, re-derived from horizontal velocity each tick.
    rotation: LQuaternionf = field(default_factory=_identity_quat)
    roll_angle: float = 0.0

    @classmethod
    def spawn(cls, *, start: LVector3f, radius: float) -> "PlayerState":
        if not float(radius) > 0.0:
            raise ValueError(f"Player radius must be positive, got {radius!r}")
        return cls(pos=LVector3f(start), vel=LVector3f(0, 0, 0), radius=float(radius))

    def sphere(self) -> Sphere:
        return Sphere(center=LVector3f(self.pos), radius=float(self.radius))

    def jump_state(self) -> JumpState:
        return JumpState(int(self.jump_count))

    def respawn(self, start: LVector3f) -> None:
        self.pos = LVector3f(start)
        self.vel = LVector3f(0, 0, 0)
        self.jump_count = 0
