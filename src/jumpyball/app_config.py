from __future__ import annotations

from dataclasses import dataclass

from jumpyball.physics.tuning import PITCH_RANGE_ORBIT


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Frames to render in smoke mode before exiting.
    smoke_frames: int = 10
    # Path to a level pack manifest (see jumpyball.maps.level_io). None plays the bundled pack.
    levels: str | None = None
    # Camera pitch clamp variant: "orbit" (0..pi/3) or "level" (-pi/4..pi/4).
    pitch_range: str = PITCH_RANGE_ORBIT
    # Upper bound on fixed ticks simulated per rendered frame, so a long stall cannot spiral.
    max_ticks_per_frame: int = 5
    window_width: int = 1280
    window_height: int = 720
