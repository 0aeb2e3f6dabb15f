"""Rolling-ball kinematics: player state, intent, tuning and box collision."""

from jumpyball.physics.collision import Axis, dominant_axis, penetration, resolve
from jumpyball.physics.intent import MotionIntent
from jumpyball.physics.player_controller import PlayerController, wish_direction
from jumpyball.physics.state import MAX_JUMP_COUNT, JumpState, PlayerState
from jumpyball.physics.tuning import FIXED_DT, CameraTuning, ControllerTuning, GoalTuning

__all__ = [
    "Axis",
    "CameraTuning",
    "ControllerTuning",
    "FIXED_DT",
    "GoalTuning",
    "JumpState",
    "MAX_JUMP_COUNT",
    "MotionIntent",
    "PlayerController",
    "PlayerState",
    "dominant_axis",
    "penetration",
    "resolve",
    "wish_direction",
]
