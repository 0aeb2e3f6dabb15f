from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from panda3d.core import LQuaternionf, LVector3f

from jumpyball.common.geometry import AxisAlignedBox
from jumpyball.course.level import Level, LevelStack, LevelTracker
from jumpyball.game.camera import CameraPose, OrbitCamera, OrbitCameraController
from jumpyball.game.input_system import DEFAULT_BINDINGS, InputSnapshot, KeyBindings, intent_from_snapshot
from jumpyball.physics.player_controller import PlayerController
from jumpyball.physics.state import PlayerState
from jumpyball.physics.tuning import FIXED_DT, CameraTuning, ControllerTuning, GoalTuning


@dataclass(frozen=True)
class PlayerTransform:
    pos: LVector3f
    # Uniform scale for a unit-radius sphere model.
    scale: float
    rotation: LQuaternionf


@dataclass(frozen=True)
class RenderFrame:
    """Everything the renderer needs for one tick. Y-up world space."""

    tick: int
    level_name: str
    player: PlayerTransform
    camera: CameraPose
    boxes: tuple[AxisAlignedBox, ...]
    goal_pos: LVector3f | None = None
    goal_model: str | None = None


@dataclass
class World:
    """All mutable per-tick state, owned by the host and passed into `advance`/`present`."""

    player: PlayerState
    camera: OrbitCamera
    levels: LevelTracker
    controller: PlayerController
    camera_controller: OrbitCameraController
    bindings: KeyBindings = field(default_factory=lambda: DEFAULT_BINDINGS)
    tick: int = 0

    @classmethod
    def create(
        cls,
        *,
        levels: Sequence[Level],
        controller_tuning: ControllerTuning | None = None,
        camera_tuning: CameraTuning | None = None,
        goal_tuning: GoalTuning | None = None,
        bindings: KeyBindings = DEFAULT_BINDINGS,
    ) -> "World":
        """Start at the first level; the rest are queued so they play in the given order."""

        if not levels:
            raise ValueError("World needs at least one level")
        controller_tuning = controller_tuning or ControllerTuning()
        camera_tuning = camera_tuning or CameraTuning()

        first = levels[0]
        player = PlayerState.spawn(start=first.start, radius=controller_tuning.player_radius)
        camera_controller = OrbitCameraController(tuning=camera_tuning)
        return cls(
            player=player,
            camera=camera_controller.create(target=player.pos, distance=first.camera_distance),
            levels=LevelTracker(
                active=first,
                pending=LevelStack.in_play_order(levels[1:]),
                tuning=goal_tuning or GoalTuning(),
            ),
            controller=PlayerController(tuning=controller_tuning),
            camera_controller=camera_controller,
            bindings=bindings,
        )

    @property
    def level(self) -> Level:
        return self.levels.active


def advance(world: World, snapshot: InputSnapshot, *, dt: float = FIXED_DT) -> World:
    """One fixed tick: kinematics (with box resolution), level/goal tracking, then the camera."""

    level = world.levels.active
    world.controller.step(
        world.player,
        intent=intent_from_snapshot(snapshot, bindings=world.bindings),
        yaw=world.camera.yaw,
        boxes=level.boxes,
        respawn_point=level.respawn_point(),
    )

    entered = world.levels.tick(world.player)
    if entered is not None:
        distance = entered.camera_distance
        world.camera.distance = float(world.camera_controller.tuning.distance if distance is None else distance)

    mouse_dx, mouse_dy = snapshot.mouse_delta()
    world.camera_controller.update(world.camera, mouse_dx=mouse_dx, mouse_dy=mouse_dy, dt=dt, target=world.player.pos)
    world.tick += 1
    return world


def present(world: World) -> RenderFrame:
    level = world.levels.active
    goal = level.goal
    return RenderFrame(
        tick=int(world.tick),
        level_name=level.name,
        player=PlayerTransform(
            pos=LVector3f(world.player.pos),
            scale=float(world.player.radius),
            rotation=LQuaternionf(world.player.rotation),
        ),
        camera=world.camera_controller.pose(world.camera),
        boxes=level.boxes,
        goal_pos=goal.pos if goal is not None else None,
        goal_model=goal.model if goal is not None else None,
    )
