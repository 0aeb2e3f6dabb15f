from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from panda3d.core import ButtonHandle, GraphicsWindow, KeyboardButton

from jumpyball.physics.intent import MotionIntent

KeySpec = str | tuple[str, ...]


def _names(keys: KeySpec) -> tuple[str, ...]:
    if isinstance(keys, str):
        return (keys,)
    return tuple(keys)


@dataclass(frozen=True)
class InputSnapshot:
    """Input polled once per tick. Pressed keys are the ones that went down since the previous snapshot."""

    keys_down: frozenset[str] = frozenset()
    keys_pressed: frozenset[str] = frozenset()
    mouse_dx: float = 0.0
    mouse_dy: float = 0.0

    def is_key_down(self, keys: KeySpec) -> bool:
        return any(k in self.keys_down for k in _names(keys))

    def is_key_pressed(self, keys: KeySpec) -> bool:
        return any(k in self.keys_pressed for k in _names(keys))

    def axis(self, negative: KeySpec, positive: KeySpec) -> float:
        """-1, 0 or 1 for an opposing key pair; both held cancel out."""

        value = 0.0
        if self.is_key_down(positive):
            value += 1.0
        if self.is_key_down(negative):
            value -= 1.0
        return value

    def mouse_delta(self) -> tuple[float, float]:
        return (float(self.mouse_dx), float(self.mouse_dy))

    def without_edges(self) -> "InputSnapshot":
        """Same held keys with no fresh presses and no mouse motion (extra ticks within one frame)."""

        return InputSnapshot(keys_down=self.keys_down)


@dataclass(frozen=True)
class KeyBindings:
    forward: tuple[str, ...] = ("arrow_up", "w")
    back: tuple[str, ...] = ("arrow_down", "s")
    left: tuple[str, ...] = ("arrow_left", "a")
    right: tuple[str, ...] = ("arrow_right", "d")
    jump: tuple[str, ...] = ("space",)

    def all_keys(self) -> tuple[str, ...]:
        out: list[str] = []
        for group in (self.forward, self.back, self.left, self.right, self.jump):
            for k in group:
                if k not in out:
                    out.append(k)
        return tuple(out)


DEFAULT_BINDINGS = KeyBindings()


def intent_from_snapshot(snapshot: InputSnapshot, *, bindings: KeyBindings = DEFAULT_BINDINGS) -> MotionIntent:
    return MotionIntent(
        move_right=snapshot.axis(bindings.left, bindings.right),
        move_forward=snapshot.axis(bindings.back, bindings.forward),
        jump_pressed=snapshot.is_key_pressed(bindings.jump),
    )


class KeyEdgeTracker:
    """Builds snapshots from raw held-key sets, deriving press edges against the previous poll."""

    def __init__(self) -> None:
        self._prev_down: frozenset[str] = frozenset()

    def reset(self) -> None:
        self._prev_down = frozenset()

    def snapshot(self, *, keys_down: Iterable[str], mouse_dx: float = 0.0, mouse_dy: float = 0.0) -> InputSnapshot:
        down = frozenset(str(k) for k in keys_down)
        pressed = down - self._prev_down
        self._prev_down = down
        return InputSnapshot(keys_down=down, keys_pressed=pressed, mouse_dx=float(mouse_dx), mouse_dy=float(mouse_dy))


_NAMED_BUTTONS = {
    "space": KeyboardButton.space,
    "arrow_up": KeyboardButton.up,
    "arrow_down": KeyboardButton.down,
    "arrow_left": KeyboardButton.left,
    "arrow_right": KeyboardButton.right,
}


def is_key_down(watcher, key_name: str) -> bool:
    if watcher is None:
        return False
    k = (key_name or "").lower().strip()
    if not k:
        return False
    named = _NAMED_BUTTONS.get(k)
    if named is not None:
        return bool(watcher.isButtonDown(named()))
    if len(k) == 1 and ord(k) < 128:
        # ASCII key (layout-dependent) + raw key (layout-independent).
        if watcher.isButtonDown(KeyboardButton.ascii_key(k)):
            return True
        return bool(watcher.isButtonDown(ButtonHandle(f"raw-{k}")))
    return bool(watcher.isButtonDown(ButtonHandle(k)))


def poll_keys_down(watcher, keys: Iterable[str]) -> frozenset[str]:
    return frozenset(k for k in keys if is_key_down(watcher, k))


def poll_mouse_delta(win) -> tuple[float, float]:
    """Pointer offset from the window center, then re-center. Offscreen buffers have no pointer."""

    if not isinstance(win, GraphicsWindow):
        return (0.0, 0.0)
    cx = win.getXSize() // 2
    cy = win.getYSize() // 2
    pointer = win.getPointer(0)
    dx = float(pointer.getX() - cx)
    dy = float(pointer.getY() - cy)
    if dx != 0.0 or dy != 0.0:
        win.movePointer(0, cx, cy)
    return (dx, dy)
