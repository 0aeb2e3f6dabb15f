from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from panda3d.core import LVector3f

from jumpyball.common.geometry import AxisAlignedBox, Sphere, box_centered, sphere_touches_box
from jumpyball.physics.state import PlayerState
from jumpyball.physics.tuning import GoalTuning

logger = logging.getLogger(__name__)


@dataclass
class Goal:
    """
    Level exit marker. Bobs on a triangle wave and completes the level when the player
    sphere reaches its trigger volume.
    """

    base_pos: LVector3f
    # Rendering handle only; the core never loads it.
    model: str = "models/box"
    counter: int = 0
    offset_y: float = 0.0

    @property
    def pos(self) -> LVector3f:
        return LVector3f(self.base_pos.x, float(self.base_pos.y) + float(self.offset_y), self.base_pos.z)

    def tick_animation(self, *, tuning: GoalTuning) -> None:
        rate = float(tuning.bob_rate)
        if int(self.counter) < tuning.bob_half_period():
            self.offset_y -= rate
        else:
            self.offset_y += rate
        self.counter = (int(self.counter) + 1) % max(1, int(tuning.bob_period))

    def volume(self, *, tuning: GoalTuning) -> AxisAlignedBox:
        return box_centered(center=self.pos, half_x=tuning.half_x, half_y=tuning.half_y, half_z=tuning.half_z)

    def contains(self, sphere: Sphere, *, tuning: GoalTuning) -> bool:
        return sphere_touches_box(sphere, self.volume(tuning=tuning))

    def reset(self) -> "Goal":
        """Copy at the start of the bob cycle."""

        return replace(self, base_pos=LVector3f(self.base_pos), counter=0, offset_y=0.0)


@dataclass(frozen=True)
class Level:
    name: str
    boxes: tuple[AxisAlignedBox, ...]
    start: LVector3f
    goal: Goal | None = None
    # None keeps the camera tuning distance.
    camera_distance: float | None = None

    def respawn_point(self) -> LVector3f | None:
        """Goal levels send a fallen player back to the start instead of onto the floor."""

        if self.goal is None:
            return None
        return LVector3f(self.start)

    def activated(self) -> "Level":
        """Copy to play, with the goal bob restarted."""

        if self.goal is None:
            return self
        return replace(self, goal=self.goal.reset())


class LevelStack:
    """Pending levels. Last pushed is entered first."""

    def __init__(self, levels: Iterable[Level] = ()) -> None:
        self._levels: list[Level] = []
        for level in levels:
            self.push(level)

    def __len__(self) -> int:
        return len(self._levels)

    def push(self, level: Level) -> None:
        self._levels.append(level)

    def pop(self) -> Level | None:
        if not self._levels:
            return None
        return self._levels.pop()

    def peek(self) -> Level | None:
        return self._levels[-1] if self._levels else None

    @classmethod
    def in_play_order(cls, levels: Iterable[Level]) -> "LevelStack":
        """Build a stack whose pops follow `levels` front to back."""

        return cls(reversed(list(levels)))


@dataclass
class LevelTracker:
    """Owns the active level and swaps it out when the player reaches the goal."""

    active: Level
    pending: LevelStack = field(default_factory=LevelStack)
    tuning: GoalTuning = field(default_factory=GoalTuning)
    completed: int = 0

    def __post_init__(self) -> None:
        self.active = self.active.activated()

    def goal_reached(self, player: PlayerState) -> bool:
        goal = self.active.goal
        if goal is None:
            return False
        return goal.contains(player.sphere(), tuning=self.tuning)

    def tick(self, player: PlayerState) -> Level | None:
        """
        Animate the goal, then test it. Returns the newly entered level on a transition.

        Reaching the goal with nothing pending is not an error; the test simply keeps firing.
        """

        goal = self.active.goal
        if goal is None:
            return None
        goal.tick_animation(tuning=self.tuning)
        if not self.goal_reached(player):
            return None

        nxt = self.pending.pop()
        if nxt is None:
            return None

        finished = self.active.name
        self.active = nxt.activated()
        self.completed += 1
        player.pos = LVector3f(nxt.start)
        player.vel.y = 0.0
        logger.info("Level %r complete, entering %r (%d pending)", finished, nxt.name, len(self.pending))
        return self.active
