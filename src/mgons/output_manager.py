# src/mgons/output_manager.py
from __future__ import annotations

from pathlib import Path
from typing import TextIO

from mgons.fmt import strip_ansi
from mgons.workspace import workspace_dir


def resolve_output_path(target: str, root: Path | None = None) -> Path:
    """'~' is expanded; a relative target lives under the workspace."""
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = (root if root is not None else workspace_dir()) / path
    return path


class OutputManager:
    """
    Echo result lines to stdout (unless quiet) and copy them, without
    colour codes, to output_file.

    The file is opened on the first line of a run and truncated then, so a
    run that fails before producing anything leaves an old file untouched.
    With append=True the run goes after the existing content and is closed
    by an empty line.
    """

    def __init__(self, output_file: str | None = None, *, quiet: bool = False, append: bool = False):
        self.quiet = quiet
        self.append = append
        self.path = resolve_output_path(output_file) if output_file else None
        self._fh: TextIO | None = None

    def write(self, line: str = "") -> None:
        if not self.quiet:
            print(line, flush=True)
        if self.path is None:
            return
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a" if self.append else "w", encoding="utf-8")
        self._fh.write(strip_ansi(line) + "\n")

    def close(self) -> None:
        if self._fh is None:
            return
        if self.append:
            self._fh.write("\n")
        self._fh.close()
        self._fh = None
