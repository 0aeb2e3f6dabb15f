"""
Level geometry loading.

Box file: one box per line, six whitespace-separated floats
`min_x max_x min_y max_y min_z max_z`. Blank lines are skipped.

Level pack: JSON manifest listing levels in play order:

    {"levels": [{"name": "level_1", "boxes": "level_1.txt", "start": [0, 2, 0],
                 "goal": [0, 2, 20], "goal_model": "models/box", "camera_distance": 10}]}

`boxes` is resolved relative to the manifest. `goal`, `goal_model` and `camera_distance`
are optional.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from panda3d.core import LVector3f

from jumpyball.common.geometry import AxisAlignedBox
from jumpyball.course.level import Goal, Level

logger = logging.getLogger(__name__)

_BOX_FIELDS = 6


class LevelFormatError(ValueError):
    """Raised when level geometry or a level pack cannot be parsed. No partial level is built."""

    def __init__(self, source: str | Path, message: str, *, line_no: int | None = None) -> None:
        self.source = str(source)
        self.line_no = line_no
        self.detail = message
        where = f"{self.source}:{line_no}" if line_no is not None else self.source
        super().__init__(f"Invalid level data in {where}: {message}")


def parse_boxes(text: str, *, source: str = "<string>") -> list[AxisAlignedBox]:
    boxes: list[AxisAlignedBox] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        parts = line.split()
        if len(parts) != _BOX_FIELDS:
            raise LevelFormatError(source, f"expected {_BOX_FIELDS} values, got {len(parts)}", line_no=line_no)
        try:
            values = [float(p) for p in parts]
        except ValueError:
            raise LevelFormatError(source, f"non-numeric value in {line!r}", line_no=line_no) from None
        if not all(math.isfinite(v) for v in values):
            raise LevelFormatError(source, f"non-finite value in {line!r}", line_no=line_no)
        try:
            boxes.append(AxisAlignedBox(*values))
        except ValueError as exc:
            raise LevelFormatError(source, str(exc), line_no=line_no) from None
    return boxes


def load_boxes(path: str | Path) -> list[AxisAlignedBox]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Box file not found: {p}")
    boxes = parse_boxes(p.read_text(encoding="utf-8"), source=str(p))
    logger.info("Loaded %d boxes from %s", len(boxes), p)
    return boxes


def _vec3(value, *, source: Path, field_name: str, index: int) -> LVector3f:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise LevelFormatError(source, f"levels[{index}].{field_name} must be a list of 3 numbers")
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError):
        raise LevelFormatError(source, f"levels[{index}].{field_name} must be a list of 3 numbers") from None
    if not all(math.isfinite(v) for v in (x, y, z)):
        raise LevelFormatError(source, f"levels[{index}].{field_name} must be finite")
    return LVector3f(x, y, z)


def _level_from_json(entry, *, manifest: Path, index: int) -> Level:
    if not isinstance(entry, dict):
        raise LevelFormatError(manifest, f"levels[{index}] must be an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        name = f"level_{index + 1}"

    boxes_ref = entry.get("boxes")
    if not isinstance(boxes_ref, str) or not boxes_ref.strip():
        raise LevelFormatError(manifest, f"levels[{index}].boxes must name a box file")
    boxes = load_boxes(manifest.parent / boxes_ref)

    start = _vec3(entry.get("start"), source=manifest, field_name="start", index=index)

    goal: Goal | None = None
    raw_goal = entry.get("goal")
    if raw_goal is not None:
        model = entry.get("goal_model")
        goal = Goal(
            base_pos=_vec3(raw_goal, source=manifest, field_name="goal", index=index),
            model=model if isinstance(model, str) and model.strip() else "models/box",
        )

    camera_distance = entry.get("camera_distance")
    if camera_distance is not None:
        if isinstance(camera_distance, bool) or not isinstance(camera_distance, (int, float)) or camera_distance <= 0:
            raise LevelFormatError(manifest, f"levels[{index}].camera_distance must be a positive number")
        camera_distance = float(camera_distance)

    return Level(
        name=name.strip(),
        boxes=tuple(boxes),
        start=start,
        goal=goal,
        camera_distance=camera_distance,
    )


def load_level_pack(path: str | Path) -> list[Level]:
    """Load every level of a pack, in play order. Any bad level fails the whole pack."""

    manifest = Path(path)
    if not manifest.is_file():
        raise FileNotFoundError(f"Level pack not found: {manifest}")
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LevelFormatError(manifest, f"invalid JSON ({exc.msg} at line {exc.lineno})") from None

    if not isinstance(payload, dict):
        raise LevelFormatError(manifest, "top level must be an object")
    entries = payload.get("levels")
    if not isinstance(entries, list) or not entries:
        raise LevelFormatError(manifest, "'levels' must be a non-empty list")

    levels = [_level_from_json(entry, manifest=manifest, index=i) for i, entry in enumerate(entries)]
    logger.info("Loaded level pack %s: %s", manifest, ", ".join(level.name for level in levels))
    return levels
