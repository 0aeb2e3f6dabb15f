from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MotionIntent:
    """Input intent for one simulation tick."""

    # Camera-relative axes in [-1, 1].
    move_right: float = 0.0
    move_forward: float = 0.0
    # Edge semantics: True only on the tick the jump key went down.
    jump_pressed: bool = False
