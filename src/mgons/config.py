# src/mgons/config.py
"""
Profiles are TOML files in <workspace>/profiles. A profile may carry a
[_PROFILE_] table with a display name and a one-line description; every
other table (SWEEP, ARITHMETIC, BEHAVIOUR, OUTPUT, FORMATTING) is handed
to the runtime as is, after the sweep bounds have been checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:  # Python < 3.11
    import tomli as tomllib  # type: ignore

from mgons.utility import UserInputError
from mgons.workspace import profiles_dir, seed_profiles

META_TABLE = "_PROFILE_"
BOUND_KEYS = ("N_MIN", "N_MAX", "M_MIN")
LAST_USED_FILE = ".current"


@dataclass
class Settings:
    name: str
    description: str
    data: dict[str, Any] = field(default_factory=dict)  # without [_PROFILE_]
    source: Path | None = None


def _path(name: str) -> Path:
    return profiles_dir() / f"{name}.toml"


def _parse(path: Path) -> Settings:
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise UserInputError(f"profile {path.name} is not valid TOML: {e}") from None
    meta = raw.pop(META_TABLE, None) or {}
    description = " ".join(str(meta.get("description") or "").split())
    return Settings(
        name=str(meta.get("name") or path.stem),
        description=description or "(no description)",
        data=raw,
        source=path,
    )


def _check_bounds(profile: Settings) -> None:
    bounds = profile.data.get("SWEEP") or {}
    where = profile.source.name if profile.source else profile.name
    for key in BOUND_KEYS:
        if key not in bounds:
            continue
        v = bounds[key]
        if isinstance(v, bool) or not isinstance(v, int) or v < 3:
            raise UserInputError(f"profile {where}: SWEEP.{key} must be an integer >= 3, got {v!r}.")
    if "N_MIN" in bounds and "N_MAX" in bounds and bounds["N_MIN"] > bounds["N_MAX"]:
        raise UserInputError(f"profile {where}: SWEEP.N_MIN is larger than SWEEP.N_MAX.")


def list_all_profiles() -> list[str]:
    seed_profiles()
    return sorted(p.stem for p in profiles_dir().glob("*.toml"))


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """(name, description) pairs; a profile that does not parse is still listed."""
    pairs = []
    for path in profiles_dir().glob("*.toml"):
        try:
            p = _parse(path)
        except UserInputError:
            pairs.append((path.stem, "(unreadable profile)"))
        else:
            pairs.append((p.name, p.description))
    return sorted(pairs, key=lambda t: t[0].lower())


def has_profile(name: str) -> bool:
    return _path(name).is_file()


def load_settings(name: str | None = None) -> Settings:
    name = name or "default"
    path = _path(name)
    if not path.is_file():
        raise UserInputError(f"Profile '{name}' not found in {profiles_dir()}")
    profile = _parse(path)
    _check_bounds(profile)
    return profile


def read_current_profile() -> str | None:
    """Name of the profile last chosen explicitly, if any."""
    try:
        text = (profiles_dir() / LAST_USED_FILE).read_text(encoding="utf-8")
    except OSError:
        return None
    return text.strip().removesuffix(".toml") or None


def write_current_profile(name: str) -> None:
    folder = profiles_dir()
    folder.mkdir(parents=True, exist_ok=True)
    (folder / LAST_USED_FILE).write_text(name.strip().removesuffix(".toml"), encoding="utf-8")
