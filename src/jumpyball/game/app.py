from __future__ import annotations

import logging
from typing import Sequence

from direct.showbase.ShowBase import ShowBase
from direct.showbase.ShowBaseGlobal import globalClock
from direct.task import Task
from panda3d.core import LQuaternionf, LVector3f, WindowProperties, loadPrcFileData

from jumpyball.app_config import RunConfig
from jumpyball.common.error_log import ErrorLog
from jumpyball.common.geometry import AxisAlignedBox
from jumpyball.course.level import Level
from jumpyball.game.input_system import KeyEdgeTracker, poll_keys_down, poll_mouse_delta
from jumpyball.game.world import RenderFrame, World, advance, present
from jumpyball.physics.tuning import FIXED_DT, CameraTuning

logger = logging.getLogger(__name__)

_SPHERE_MODEL = "models/misc/sphere"
_BOX_MODEL = "models/box"


def to_panda(v: LVector3f) -> LVector3f:
    """Y-up simulation space -> Panda3D Z-up render space."""

    return LVector3f(v.x, -v.z, v.y)


def quat_to_panda(q: LQuaternionf) -> LQuaternionf:
    # Same basis change as `to_panda`, applied to the vector part.
    return LQuaternionf(q.getR(), q.getI(), -q.getK(), q.getJ())


class JumpyBallApp(ShowBase):
    """Thin Panda3D host: polls input, runs fixed ticks, and places nodes from each RenderFrame."""

    def __init__(self, cfg: RunConfig, *, levels: Sequence[Level]) -> None:
        loadPrcFileData("", "audio-library-name null")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()
        self.error_log = ErrorLog()
        self.world = World.create(levels=levels, camera_tuning=CameraTuning.for_pitch_range(cfg.pitch_range))
        self._edges = KeyEdgeTracker()
        self._accum = 0.0
        self._level_name: str | None = None

        self._setup_window()
        tuning = self.world.camera_controller.tuning
        self.camLens.setFov(float(tuning.fov))
        self.camLens.setNearFar(float(tuning.near), float(tuning.far))

        self._player_np = self.loader.loadModel(_SPHERE_MODEL)
        self._player_np.reparentTo(self.render)
        self._goal_np = None
        self._level_root = self.render.attachNewNode("level")

        self.accept("escape", self.userExit)
        self._apply_frame(present(self.world))
        self.taskMgr.add(self._update, "jumpyball-update")

        if cfg.smoke:
            self._smoke_frames = max(1, int(cfg.smoke_frames))
            self.taskMgr.add(self._smoke_exit, "smoke-exit")

    def _setup_window(self) -> None:
        if self.cfg.smoke:
            return
        props = WindowProperties()
        props.setTitle("jumpyball")
        props.setSize(int(self.cfg.window_width), int(self.cfg.window_height))
        props.setCursorHidden(True)
        self.win.requestProperties(props)

    def _update(self, task: Task) -> int:
        try:
            frame_dt = min(globalClock.getDt(), 0.25)
            self._accum = min(self._accum + frame_dt, FIXED_DT * max(1, int(self.cfg.max_ticks_per_frame)))
            if self._accum < FIXED_DT:
                # Leave input unpolled so a press is not lost on a frame without a tick.
                return Task.cont

            keys = poll_keys_down(self.mouseWatcherNode, self.world.bindings.all_keys())
            mouse_dx, mouse_dy = (0.0, 0.0) if self.cfg.smoke else poll_mouse_delta(self.win)
            snapshot = self._edges.snapshot(keys_down=keys, mouse_dx=mouse_dx, mouse_dy=mouse_dy)
            while self._accum >= FIXED_DT:
                advance(self.world, snapshot)
                snapshot = snapshot.without_edges()
                self._accum -= FIXED_DT

            self._apply_frame(present(self.world))
        except Exception as exc:
            self.error_log.log_exception(tick=self.world.tick, context="update", exc=exc)
        return Task.cont

    def _apply_frame(self, frame: RenderFrame) -> None:
        if frame.level_name != self._level_name:
            self._build_level(frame)

        self._player_np.setPos(to_panda(frame.player.pos))
        self._player_np.setQuat(quat_to_panda(frame.player.rotation))
        self._player_np.setScale(float(frame.player.scale))

        if self._goal_np is not None and frame.goal_pos is not None:
            tuning = self.world.levels.tuning
            corner = LVector3f(frame.goal_pos.x - tuning.half_x, frame.goal_pos.y - tuning.half_y, frame.goal_pos.z + tuning.half_z)
            self._goal_np.setPos(to_panda(corner))

        cam = frame.camera
        self.camera.setPos(to_panda(cam.eye))
        self.camera.lookAt(to_panda(cam.at), to_panda(cam.up))

    def _build_level(self, frame: RenderFrame) -> None:
        self._level_root.removeNode()
        self._level_root = self.render.attachNewNode(f"level-{frame.level_name}")
        for i, box in enumerate(frame.boxes):
            self._attach_box(box, name=f"box-{i}", color=(0.55, 0.55, 0.6, 1.0))

        self._goal_np = None
        if frame.goal_pos is not None:
            tuning = self.world.levels.tuning
            self._goal_np = self.loader.loadModel(frame.goal_model or _BOX_MODEL)
            self._goal_np.reparentTo(self._level_root)
            self._goal_np.setScale(2.0 * tuning.half_x, 2.0 * tuning.half_z, 2.0 * tuning.half_y)
            self._goal_np.setColor(1.0, 0.8, 0.1, 1.0)

        self._level_name = frame.level_name
        logger.info("Built level %r (%d boxes)", frame.level_name, len(frame.boxes))

    def _attach_box(self, box: AxisAlignedBox, *, name: str, color: tuple[float, float, float, float]) -> None:
        # models/box spans 0..1 on each axis; place it at the Panda-space minimum corner.
        np = self.loader.loadModel(_BOX_MODEL)
        np.setName(name)
        np.reparentTo(self._level_root)
        np.setPos(box.min_x, -box.max_z, box.min_y)
        size = box.size()
        np.setScale(max(1e-3, float(size.x)), max(1e-3, float(size.z)), max(1e-3, float(size.y)))
        np.setColor(*color)

    def _smoke_exit(self, task: Task) -> int:
        self._smoke_frames -= 1
        if self._smoke_frames <= 0:
            for item in self.error_log.items():
                logger.warning("smoke: %s", item.summary_line())
            self.userExit()
            return Task.done
        return Task.cont


def run(cfg: RunConfig, *, levels: Sequence[Level]) -> None:
    app = JumpyBallApp(cfg, levels=levels)
    app.run()
