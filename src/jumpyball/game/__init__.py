"""
Frame orchestration.

- `World`, `advance`, `present`: the engine-independent per-tick pair.
- `jumpyball.game.app`: the Panda3D host (imported on demand; it pulls in ShowBase).
"""

from __future__ import annotations

from .camera import CameraPose, OrbitCamera, OrbitCameraController
from .input_system import InputSnapshot, KeyBindings, KeyEdgeTracker, intent_from_snapshot
from .world import PlayerTransform, RenderFrame, World, advance, present

__all__ = [
    "CameraPose",
    "InputSnapshot",
    "KeyBindings",
    "KeyEdgeTracker",
    "OrbitCamera",
    "OrbitCameraController",
    "PlayerTransform",
    "RenderFrame",
    "World",
    "advance",
    "intent_from_snapshot",
    "present",
]
