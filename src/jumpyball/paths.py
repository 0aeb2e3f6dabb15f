from __future__ import annotations

from pathlib import Path

import jumpyball


def package_root() -> Path:
    """
    Return the installed `jumpyball` package directory.

    Derived from the package location so it stays correct when called from a
    deeper subpackage (e.g. jumpyball/maps/...).
    """

    return Path(jumpyball.__file__).resolve().parent


def levels_root() -> Path:
    return package_root() / "assets" / "levels"


def default_level_pack() -> Path:
    return levels_root() / "pack.json"
