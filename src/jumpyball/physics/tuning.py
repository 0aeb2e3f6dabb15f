from __future__ import annotations

import math
from dataclasses import dataclass, replace

# The simulation runs at a fixed 60 Hz; velocities and gravity below are per tick.
FIXED_DT = 1.0 / 60.0

PITCH_RANGE_ORBIT = "orbit"
PITCH_RANGE_LEVEL = "level"

# Camera pitch clamp variants. "orbit" keeps the eye at or above the player,
# "level" allows looking up from slightly below.
PITCH_RANGES: dict[str, tuple[float, float]] = {
    PITCH_RANGE_ORBIT: (0.0, math.pi / 3.0),
    PITCH_RANGE_LEVEL: (-math.pi / 4.0, math.pi / 4.0),
}


@dataclass
class ControllerTuning:
    player_radius: float = 1.0
    # Horizontal speed is instantaneous: input * move_speed is the x/z velocity for the tick.
    move_speed: float = 0.1
    gravity: float = -0.03
    # Jump impulse sets vertical velocity to move_speed * jump_multiplier.
    jump_multiplier: float = 5.0
    # Rolling visual: angle per tick = horizontal speed / roll_divisor * jump-state multiplier.
    # None derives the circumference 2*pi*radius; the first prototype used a fixed 2/pi.
    roll_divisor: float | None = None
    # Indexed by jump-count (grounded, single, double).
    roll_multipliers: tuple[float, float, float] = (1.0, 0.5, 2.0)
    # Ground plane height. Sphere centers below floor_y + radius have fallen through it.
    floor_y: float = 0.0

    def jump_speed(self) -> float:
        return float(self.move_speed) * float(self.jump_multiplier)

    def roll_divisor_value(self) -> float:
        if self.roll_divisor is not None:
            return max(1e-6, float(self.roll_divisor))
        return 2.0 * math.pi * max(1e-6, float(self.player_radius))

    def floor_threshold(self) -> float:
        return float(self.floor_y) + float(self.player_radius)


@dataclass
class CameraTuning:
    distance: float = 10.0
    # Mouse delta scale: angle += delta * dt * sensitivity.
    sensitivity: float = 0.1
    pitch_min: float = 0.0
    pitch_max: float = math.pi / 3.0
    initial_yaw: float = 0.0
    initial_pitch: float = math.pi / 6.0
    fov: float = 60.0
    near: float = 0.1
    far: float = 1000.0

    @classmethod
    def for_pitch_range(cls, name: str, **overrides) -> "CameraTuning":
        try:
            lo, hi = PITCH_RANGES[name]
        except KeyError:
            raise ValueError(f"Unknown pitch range {name!r} (expected one of {sorted(PITCH_RANGES)})") from None
        return replace(cls(**overrides), pitch_min=lo, pitch_max=hi)

    def clamp_pitch(self, pitch: float) -> float:
        return max(float(self.pitch_min), min(float(self.pitch_max), float(pitch)))


@dataclass
class GoalTuning:
    # Goal trigger volume half extents around the (bobbing) goal position.
    half_x: float = 0.5
    half_y: float = 1.0
    half_z: float = 0.5
    # Bob: down by bob_rate for the first half of the period, then up by bob_rate.
    bob_rate: float = 0.01
    bob_period: int = 200

    def bob_half_period(self) -> int:
        return max(1, int(self.bob_period) // 2)
