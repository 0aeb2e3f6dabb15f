from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jumpyball.app_config import RunConfig
from jumpyball.maps.level_io import LevelFormatError, load_boxes, load_level_pack
from jumpyball.paths import default_level_pack
from jumpyball.physics.tuning import PITCH_RANGE_ORBIT, PITCH_RANGES


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="jumpyball", description="Rolling-ball 3D platformer")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run a few frames offscreen and exit (for quick verification).",
    )
    parser.add_argument(
        "--levels",
        default=None,
        help="Level pack manifest (JSON). Defaults to the bundled pack.",
    )
    parser.add_argument(
        "--check-level",
        default=None,
        metavar="BOX_FILE",
        help="Parse a box file, print how many boxes it holds, and exit.",
    )
    parser.add_argument(
        "--pitch-range",
        choices=sorted(PITCH_RANGES),
        default=PITCH_RANGE_ORBIT,
        help="Camera pitch clamp: orbit = 0..pi/3, level = -pi/4..pi/4.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.check_level:
        try:
            boxes = load_boxes(Path(args.check_level))
        except (FileNotFoundError, LevelFormatError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(f"{args.check_level}: {len(boxes)} boxes")
        return 0

    cfg = RunConfig(smoke=args.smoke, levels=args.levels, pitch_range=args.pitch_range)
    pack = Path(cfg.levels) if cfg.levels else default_level_pack()
    try:
        levels = load_level_pack(pack)
    except (FileNotFoundError, LevelFormatError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    # ShowBase is only needed once we actually open a window.
    from jumpyball.game.app import run

    run(cfg, levels=levels)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
