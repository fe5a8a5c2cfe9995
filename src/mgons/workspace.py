# src/mgons/workspace.py
"""The user's workspace folder and the profiles seeded into it."""

from __future__ import annotations

import os
import shutil
from importlib.resources import as_file, files
from pathlib import Path

HOME_ENV = "MGONS_HOME"


def workspace_dir() -> Path:
    """$MGONS_HOME if set, else ~/Documents/Mgons."""
    custom = os.environ.get(HOME_ENV)
    base = Path(custom).expanduser() if custom else Path.home() / "Documents" / "Mgons"
    return base.resolve()


def profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def seed_profiles() -> list[str]:
    """
    Copy every packaged profile the workspace does not have yet and return
    the names copied. Profiles already in the workspace are never replaced,
    so local edits survive upgrades.
    """
    target = profiles_dir()
    target.mkdir(parents=True, exist_ok=True)
    copied: list[str] = []
    with as_file(files("mgons") / "profiles") as packaged:
        for src in sorted(Path(packaged).glob("*.toml")):
            dst = target / src.name
            if not dst.exists():
                shutil.copyfile(src, dst)
                copied.append(src.stem)
    return copied
