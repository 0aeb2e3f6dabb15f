from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f

from jumpyball.common.geometry import rotate_x, rotate_y
from jumpyball.physics.tuning import CameraTuning

WORLD_UP = LVector3f(0, 1, 0)


@dataclass(frozen=True)
class CameraPose:
    eye: LVector3f
    at: LVector3f
    up: LVector3f
    fov: float
    near: float
    far: float


@dataclass
class OrbitCamera:
    yaw: float
    pitch: float
    distance: float
    # Last known player position; the eye is recomputed around it.
    target: LVector3f


class OrbitCameraController:
    """Third-person camera orbiting the player from raw mouse deltas. No smoothing."""

    def __init__(self, *, tuning: CameraTuning) -> None:
        self.tuning = tuning

    def create(self, *, target: LVector3f, distance: float | None = None) -> OrbitCamera:
        return OrbitCamera(
            yaw=float(self.tuning.initial_yaw),
            pitch=self.tuning.clamp_pitch(self.tuning.initial_pitch),
            distance=float(self.tuning.distance if distance is None else distance),
            target=LVector3f(target),
        )

    def update(
        self,
        camera: OrbitCamera,
        *,
        mouse_dx: float,
        mouse_dy: float,
        dt: float,
        target: LVector3f,
    ) -> CameraPose:
        scale = float(dt) * float(self.tuning.sensitivity)
        camera.pitch = self.tuning.clamp_pitch(float(camera.pitch) + float(mouse_dy) * scale)
        camera.yaw = float(camera.yaw) + float(mouse_dx) * scale
        camera.target = LVector3f(target)
        return self.pose(camera)

    def pose(self, camera: OrbitCamera) -> CameraPose:
        offset = rotate_y(rotate_x(LVector3f(0.0, 0.0, -float(camera.distance)), float(camera.pitch)), float(camera.yaw))
        return CameraPose(
            eye=LVector3f(camera.target) + offset,
            at=LVector3f(camera.target),
            up=LVector3f(WORLD_UP),
            fov=float(self.tuning.fov),
            near=float(self.tuning.near),
            far=float(self.tuning.far),
        )
