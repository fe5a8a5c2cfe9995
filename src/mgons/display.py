# src/mgons/display.py
from __future__ import annotations

from colorama import Fore, Style

from mgons.config import list_profiles_with_descriptions, read_current_profile
from mgons.fmt import abbr_count
from mgons.formula import MgonTerms
from mgons.output_manager import OutputManager
from mgons.perimeter import PerimeterRow


def _title(text: str) -> str:
    return f"{Fore.YELLOW}{Style.BRIGHT}{text}{Style.RESET_ALL}"


def print_count(m: int, n: int, count: int, *, om: OutputManager) -> None:
    om.write(f"{_title(f'{m}-gons with perimeter {n}:')} {Fore.CYAN}{abbr_count(count)}{Style.RESET_ALL}")


def print_terms(t: MgonTerms, *, om: OutputManager) -> None:
    """Show how the numerator for one (m, n) was put together."""
    case = "odd m" if t.m & 1 else "even m"
    scale = "2m" if t.m & 1 else "m"
    om.write(_title(f"Terms for m={t.m}, n={t.n}"))
    om.write(f"  gcd(m, n)            {t.gcd}")
    om.write(f"  divisor sum          +{abbr_count(t.divisor_term)}")
    om.write(f"  2m·C(⌊n/2⌋, m-1)     -{abbr_count(t.reflection_term)}")
    om.write(f"  {case} sum × {scale:<6}  +{abbr_count(t.parity_term)}")
    om.write(f"  numerator            {abbr_count(t.numerator)}")
    om.write(f"  denominator 4m       {t.denom}")
    ok = t.remainder == 0
    mark = f"{Fore.GREEN}exact{Style.RESET_ALL}" if ok else f"{Fore.RED}remainder {t.remainder}{Style.RESET_ALL}"
    om.write(f"  division             {mark}")


def print_total_breakdown(row: PerimeterRow, *, om: OutputManager) -> None:
    """Per-m counts for one perimeter, then the total."""
    om.write(_title(f"Polygons with perimeter {row.n}"))
    width = len(str(row.n))
    for m in range(row.m_min, row.n + 1):
        c = row.count_for(m)
        colour = Fore.CYAN if c else Style.DIM
        om.write(f"  m={m:<{width}}  {colour}{abbr_count(c)}{Style.RESET_ALL}")
    om.write(f"  {'total':<{width + 2}}  {Style.BRIGHT}{abbr_count(row.total)}{Style.RESET_ALL}  (log2 ≤ {row.log2})")


def print_profiles_with_descriptions() -> None:
    pairs = list_profiles_with_descriptions()

    if not pairs:
        print("\nAvailable profiles: (none)")
        return

    current = read_current_profile()

    lines = []
    for name, desc in pairs:
        mark = "*" if current and name == current else " "
        lines.append(f"{mark} {name:13} — {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))
