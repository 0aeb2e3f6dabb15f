from __future__ import annotations

import math
from typing import Iterable

from panda3d.core import LRotationf, LVector3f

from jumpyball.common.geometry import AxisAlignedBox, rotate_y
from jumpyball.physics.collision import resolve
from jumpyball.physics.intent import MotionIntent
from jumpyball.physics.state import MAX_JUMP_COUNT, JumpState, PlayerState
from jumpyball.physics.tuning import ControllerTuning

_WORLD_UP = LVector3f(0, 1, 0)


def wish_direction(*, move_right: float, move_forward: float, yaw: float) -> LVector3f:
    """
    Rotate the horizontal input vector by the camera yaw.

    At yaw 0 the camera looks down +Z, so forward is +Z and right is -X.
    """

    right = max(-1.0, min(1.0, float(move_right)))
    forward = max(-1.0, min(1.0, float(move_forward)))
    return rotate_y(LVector3f(-right, 0.0, forward), float(yaw))


class PlayerController:
    """Kinematic rolling-ball controller: double jump, per-tick gravity, camera-relative roll, box pushes."""

    def __init__(self, *, tuning: ControllerTuning) -> None:
        self.tuning = tuning

    def step(
        self,
        player: PlayerState,
        *,
        intent: MotionIntent,
        yaw: float,
        boxes: Iterable[AxisAlignedBox],
        respawn_point: LVector3f | None = None,
    ) -> None:
        """
        Advance one fixed tick.

        `respawn_point` is the level start for goal levels: falling below the floor
        teleports there instead of landing on the floor plane.
        """

        if intent.jump_pressed:
            self.try_jump(player)

        player.vel.y += float(self.tuning.gravity)

        wish = wish_direction(move_right=intent.move_right, move_forward=intent.move_forward, yaw=yaw)
        speed = float(self.tuning.move_speed)
        player.vel.x = float(wish.x) * speed
        player.vel.z = float(wish.z) * speed
        player.pos += player.vel

        self._apply_floor_fallback(player, respawn_point=respawn_point)
        self._apply_roll(player)

        # Every box is tested every tick; corrections accumulate in list order.
        for box in boxes:
            resolve(player, box)

    def try_jump(self, player: PlayerState) -> bool:
        if int(player.jump_count) >= MAX_JUMP_COUNT:
            return False
        player.vel.y = self.tuning.jump_speed()
        player.jump_count = int(player.jump_count) + 1
        return True

    def roll_multiplier(self, player: PlayerState) -> float:
        return float(self.tuning.roll_multipliers[int(player.jump_state())])

    def _apply_floor_fallback(self, player: PlayerState, *, respawn_point: LVector3f | None) -> None:
        threshold = self.tuning.floor_threshold()
        if float(player.pos.y) >= threshold:
            return
        if respawn_point is not None:
            player.respawn(respawn_point)
            return
        player.pos.y = threshold
        player.vel.y = 0.0
        player.jump_count = int(JumpState.GROUNDED)

    def _apply_roll(self, player: PlayerState) -> None:
        hvel = LVector3f(player.vel.x, 0.0, player.vel.z)
        speed = float(hvel.length())
        if speed <= 1e-9:
            player.roll_angle = 0.0
            return

        angle = speed / self.tuning.roll_divisor_value() * self.roll_multiplier(player)
        player.roll_angle = angle

        # Rolling along v turns the ball about up x v.
        axis = _WORLD_UP.cross(hvel)
        axis.normalize()
        roll = LRotationf(axis, math.degrees(angle))
        player.rotation = player.rotation * roll
        player.rotation.normalize()
