# src/mgons/cli.py

"""
mgons - Integer-Sided Polygons by Perimeter

Description:
    Counts the distinct polygons (up to rotation and reflection) with m
    sides of positive integer length and perimeter n, using the East–Niles
    formula in exact integer arithmetic. The default sweep prints, for every
    perimeter n = 3..250, one CSV line "<total>",<n>,<log2>.

usage: see mgons -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
import traceback
from importlib.resources import files as pkg_files
from time import perf_counter

from colorama import Fore, Style, just_fix_windows_console

from mgons import __version__ as _ver
from mgons import config as CONFIG
from mgons.display import (
    print_count,
    print_profiles_with_descriptions,
    print_terms,
    print_total_breakdown,
)
from mgons.fmt import format_row, table_header
from mgons.formula import InternalConsistencyError, compute_mgon, mgon_terms
from mgons.output_manager import OutputManager
from mgons.perimeter import M_MIN, N_MAX, N_MIN, sweep
from mgons.progress import Progress
from mgons.runtime import APPLY, CFG
from mgons.runtime import current as _rt_current
from mgons.utility import UserInputError, check_output_target, flatten_dotted, parse_natural
from mgons.workspace import seed_profiles, workspace_dir

COMMANDS = ("sweep", "count", "total", "profiles", "active", "where", "init")
FORMATS = ("csv", "table")


def _report_user_error(msg: str) -> None:
    label, colon, rest = msg.partition(":")
    if colon and label in ("Invalid input", "Error"):
        print(f"{Fore.RED}{label}:{Style.RESET_ALL}{rest}", file=sys.stderr)
    else:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


def _tolerate_ascii_stdout() -> None:
    # table rows contain "…" and "≤"; an ASCII pipe gets "?" instead of a crash
    enc = (getattr(sys.stdout, "encoding", None) or "").lower()
    if enc in ("ascii", "us-ascii", "ansi_x3.4-1968") and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="replace")


def _is_int_token(s: str) -> bool:
    return s.replace("_", "").isdigit()


def _split_items(items: list[str]) -> tuple[str | None, str, list[str]]:
    """Return (profile, command, args) from the positionals.

    Rules:
      - a leading word that is neither a command nor an integer is a profile name
      - the next word, if it is a command, selects it; otherwise 'sweep'
      - bare integers are arguments of 'sweep' (N_MAX, or N_MIN N_MAX)
    """
    rest = list(items)
    profile = None
    if rest and rest[0].lower() not in COMMANDS and not _is_int_token(rest[0]):
        profile = rest.pop(0)
    command = "sweep"
    if rest and rest[0].lower() in COMMANDS:
        command = rest.pop(0).lower()
    return profile, command, rest


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      sweep [N_MAX] | [N_MIN N_MAX]
          Total polygon count for every perimeter in the range (default command).

      count M N
          Number of M-gons with perimeter N. Add --terms to see the formula parts.

      total N
          Per-M counts and the total for perimeter N.

      profiles | active
          List the profiles / show the last used one.

      where
          Show the workspace and package paths.

      init
          Create the workspace and copy in any packaged profile it lacks.
    """)

    p = argparse.ArgumentParser(
        prog="mgons",
        description="Integer-sided polygons, up to rotation and reflection, counted by perimeter",
        usage=(
            "mgons [profile] [command] [args...] [--output FILE] [--format {csv,table}] [--quiet] [--debug]\n"
            "       mgons -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[profile] [command] [args]",
                   help="optional profile name, a command and its integer arguments")
    p.add_argument("--profile", default=None, help="Profile to load (default: last used, then 'default')")
    p.add_argument("--output", default=None, help="Write results to a file (also prints unless --quiet)")
    p.add_argument("--append", action="store_true", help="Append to --output instead of replacing it")
    p.add_argument("--format", choices=FORMATS, default=None, help="Row format for sweeps (profile OUTPUT.FORMAT)")
    p.add_argument("--terms", action="store_true", help="With 'count': show the numerator terms")
    p.add_argument("--quiet", action="store_true", help="Suppress screen output (use with --output)")
    p.add_argument("--no-progress", action="store_true", help="Never draw the progress bar")
    p.add_argument("--debug", action="store_true", help="Show timings, settings and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Entry point: map failures to exit codes 2 (input), 1 (computation), 130 (Ctrl-C)."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _report_user_error(str(e))
        return 2
    except InternalConsistencyError as e:
        print(f"{Fore.RED}{Style.BRIGHT}Internal consistency check failed:{Style.RESET_ALL} {e}", file=sys.stderr)
        if _rt_current().debug:
            traceback.print_exc()
        return 1
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if _rt_current().debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _select_profile_name(explicit: str | None) -> str:
    """The profile named on the command line, else the last one used, else 'default'."""
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    return last if last and CONFIG.has_profile(last) else "default"


def _apply_profile(name: str, *, remember: bool, debug: bool = False) -> None:
    if not CONFIG.has_profile(name):
        known = ", ".join(CONFIG.list_all_profiles()) or "(none)"
        raise UserInputError(f"Unknown profile: '{name}'. Available profiles: {known}")
    profile = CONFIG.load_settings(name)
    APPLY(profile)
    rt = _rt_current()
    rt.debug = rt.debug or debug
    if remember:
        CONFIG.write_current_profile(name)

    if rt.debug:
        _debug(f"active profile: {profile.name} ({profile.description})")
        _debug(f"profile file: {profile.source}")
        for key, value in sorted(flatten_dotted(rt.settings).items()):
            print(f"        {key:.<36} {value!r}", file=sys.stderr)
        _debug(f"arithmetic backend: {'gmpy2.mpz' if rt.use_gmpy2 else 'int'}")


def _sweep_bounds(args_: list[str]) -> tuple[int, int]:
    n_min = int(CFG("SWEEP.N_MIN", N_MIN))
    n_max = int(CFG("SWEEP.N_MAX", N_MAX))
    if len(args_) > 2:  # noqa: PLR2004
        raise UserInputError("Invalid input: sweep takes at most two integers (N_MIN N_MAX).")
    if len(args_) == 2:  # noqa: PLR2004
        n_min = parse_natural(args_[0], "N_MIN")
    if args_:
        n_max = parse_natural(args_[-1], "N_MAX")
    if n_min > n_max:
        raise UserInputError(f"Invalid input: N_MIN ({n_min}) is larger than N_MAX ({n_max}).")
    return n_min, n_max


def _run_sweep(args_: list[str], *, fmt: str, om: OutputManager, show_progress: bool) -> int:
    n_min, n_max = _sweep_bounds(args_)
    m_min = int(CFG("SWEEP.M_MIN", M_MIN))
    _debug(f"sweep n={n_min}..{n_max}, m >= {m_min}, format={fmt}")

    prog = Progress(n_max - n_min + 1, enabled=show_progress)
    if fmt == "table":
        om.write(table_header())

    last = perf_counter()
    try:
        for row in sweep(n_min, n_max, m_min=m_min, progress=prog.update):
            om.write(format_row(row, fmt))
            if _rt_current().debug:
                now = perf_counter()
                _debug(f"n={row.n} in {now - last:.3f}s")
                last = now
    finally:
        prog.clear()
    _debug(f"sweep finished in {prog.elapsed:.2f}s")
    return 0


def _run_count(args_: list[str], *, om: OutputManager, terms: bool) -> int:
    if len(args_) != 2:  # noqa: PLR2004
        raise UserInputError("Invalid input: count needs two integers, M and N.")
    m = parse_natural(args_[0], "M")
    n = parse_natural(args_[1], "N")
    if n < m:
        raise UserInputError(f"Invalid input: perimeter N ({n}) must be at least M ({m}).")
    if terms:
        print_terms(mgon_terms(m, n), om=om)
    print_count(m, n, compute_mgon(m, n), om=om)
    return 0


def _run_total(args_: list[str], *, om: OutputManager) -> int:
    if len(args_) != 1:
        raise UserInputError("Invalid input: total needs one integer, N.")
    n = parse_natural(args_[0], "N")
    m_min = int(CFG("SWEEP.M_MIN", M_MIN))
    row = next(sweep(n, n, m_min=m_min, with_counts=True))
    print_total_breakdown(row, om=om)
    return 0


def _run_init(args_: list[str]) -> int:
    if args_:
        raise UserInputError("Invalid input: init takes no arguments.")
    copied = seed_profiles()
    print(f"Workspace: {workspace_dir()}")
    print(f"Profiles copied: {', '.join(copied) if copied else 'none, all present'}")
    return 0


# ---- main ----
def _main_impl(argv=None) -> int:

    just_fix_windows_console()
    _tolerate_ascii_stdout()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    if args.append and not args.output:
        parser.error("--append can only be used together with --output")

    pos_profile, command, cmd_args = _split_items(args.items)
    if pos_profile and args.profile and pos_profile != args.profile:
        raise UserInputError(f"Two profiles given: '{pos_profile}' and --profile '{args.profile}'.")

    if command == "init":
        return _run_init(cmd_args)

    seed_profiles()
    if command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('mgons')}")
        return 0
    if command == "profiles":
        print_profiles_with_descriptions()
        return 0
    if command == "active":
        print(f"Active profile: {CONFIG.read_current_profile() or 'default'}")
        return 0

    explicit = args.profile or pos_profile
    _apply_profile(_select_profile_name(explicit), remember=bool(explicit), debug=args.debug)

    # --output wins over the profile's OUTPUT.OUTPUT_FILE
    target = check_output_target(args.output if args.output is not None else CFG("OUTPUT.OUTPUT_FILE", None))

    fmt = (args.format or str(CFG("OUTPUT.FORMAT", "csv"))).lower()
    if fmt not in FORMATS:
        raise UserInputError(f"OUTPUT.FORMAT must be one of {', '.join(FORMATS)}, got '{fmt}'.")

    show_progress = (
        rt.progress
        and not args.no_progress
        and sys.stderr.isatty()
        and (args.quiet or not sys.stdout.isatty())
    )

    om = OutputManager(target, quiet=args.quiet, append=args.append)
    try:
        if command == "count":
            return _run_count(cmd_args, om=om, terms=args.terms)
        if command == "total":
            return _run_total(cmd_args, om=om)
        return _run_sweep(cmd_args, fmt=fmt, om=om, show_progress=show_progress)
    finally:
        om.close()
        if om.path:
            _debug(f"output written to {om.path}")


if __name__ == "__main__":
    raise SystemExit(main())
