# src/mgons/fmt.py
from __future__ import annotations

import csv
import io
import re

from colorama import Fore, Style

from mgons.perimeter import PerimeterRow
from mgons.runtime import CFG

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def abbr_int(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Show a long integer as its first `head` and last `tail` digits."""
    digits = str(abs(n))
    if len(digits) <= threshold or head + tail >= len(digits):
        return str(n)
    sign = "-" if n < 0 else ""
    return f"{sign}{digits[:head]}{ellipsis}{digits[-tail:]}"


def abbr_count(n: int) -> str:
    """abbr_int() with the FORMATTING.* profile settings."""
    return abbr_int(
        int(n),
        int(CFG("FORMATTING.NUM_ABBR_HEAD", 12)),
        int(CFG("FORMATTING.NUM_ABBR_TAIL", 12)),
        int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 40)),
        str(CFG("FORMATTING.ELLIPSIS", "…")),
    )


# --- CSV ---------------------------------------------------------------------

def csv_row(row: PerimeterRow) -> str:
    """'"<total>",<n>,<log2>' - the total is quoted so spreadsheets may keep it as text."""
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="")
    w.writerow([str(row.total), row.n, row.log2])
    return buf.getvalue()


# --- Table -------------------------------------------------------------------

def table_header(width: int = 6) -> str:
    return f"{Style.BRIGHT}{'n':>{width}}  {'log2':>5}  total{Style.RESET_ALL}"


def table_row(row: PerimeterRow, width: int = 6) -> str:
    return f"{row.n:>{width}}  {row.log2:>5}  {Fore.CYAN}{abbr_count(row.total)}{Style.RESET_ALL}"


def format_row(row: PerimeterRow, fmt: str) -> str:
    if fmt == "table":
        return table_row(row)
    return csv_row(row)
