# src/mgons/utility.py
from __future__ import annotations

from pathlib import PurePath

# Never let a sweep overwrite a profile or a source file
_PROTECTED_SUFFIXES = (".toml", ".py")


class UserInputError(Exception):
    """Bad arguments or profile content. The CLI prints it on one line and exits 2."""


def parse_natural(text: str, what: str, minimum: int = 3) -> int:
    """CLI integer such as '250' or '1_000', at least `minimum`."""
    try:
        value = int(text.replace("_", ""))
    except ValueError:
        raise UserInputError(f"Invalid input: {what} must be an integer, got {text!r}.") from None
    if value < minimum:
        raise UserInputError(f"Invalid input: {what} must be at least {minimum}, got {value}.")
    return value


def check_output_target(target: str | None) -> str | None:
    """Return the file rows should go to, or None for the screen only."""
    if not target:
        return None
    if target in (".", "..") or target.endswith(("/", "\\")):
        raise UserInputError(f"output file: '{target}' names a folder, not a file.")
    if PurePath(target).suffix.lower() in _PROTECTED_SUFFIXES:
        raise UserInputError(f"output file: will not write rows into '{target}'.")
    return target


def flatten_dotted(tables: dict, prefix: str = "") -> dict[str, object]:
    """{'SWEEP': {'N_MAX': 250}} -> {'SWEEP.N_MAX': 250}"""
    flat: dict[str, object] = {}
    for key, value in tables.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_dotted(value, dotted + "."))
        else:
            flat[dotted] = value
    return flat
