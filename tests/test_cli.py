# tests/test_cli.py
from __future__ import annotations

import pytest

from mgons import config
from mgons.cli import _split_items, main
from mgons.fmt import strip_ansi

# ---------- helpers -----------------------------------------------------------


def run(capsys, *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, strip_ansi(out), strip_ansi(err)


SPLIT_CASES = [
    ([], (None, "sweep", [])),
    (["40"], (None, "sweep", ["40"])),
    (["3", "40"], (None, "sweep", ["3", "40"])),
    (["count", "3", "5"], (None, "count", ["3", "5"])),
    (["quick"], ("quick", "sweep", [])),
    (["quick", "total", "9"], ("quick", "total", ["9"])),
    (["WHERE"], (None, "where", [])),
]


@pytest.mark.parametrize("items,expected", SPLIT_CASES, ids=[" ".join(i) or "<empty>" for i, _ in SPLIT_CASES])
def test_split_items(items, expected):
    assert _split_items(items) == expected


# ---------- commands ----------------------------------------------------------


def test_sweep_prints_classic_csv(capsys):
    code, out, _ = run(capsys, "sweep", "3", "6", "--no-progress")
    assert code == 0
    assert out.splitlines() == ['"1",3,0', '"1",4,0', '"3",5,2', '"5",6,3']


def test_bare_integer_is_sweep_upper_bound(capsys):
    code, out, _ = run(capsys, "5", "--no-progress")
    assert code == 0
    assert out.splitlines() == ['"1",3,0', '"1",4,0', '"3",5,2']


def test_table_format(capsys):
    code, out, _ = run(capsys, "sweep", "3", "5", "--format", "table")
    assert code == 0
    lines = out.splitlines()
    assert lines[0].split() == ["n", "log2", "total"]
    assert lines[-1].split() == ["5", "2", "3"]


def test_count_command(capsys):
    code, out, _ = run(capsys, "count", "4", "6")
    assert code == 0
    assert out.strip() == "4-gons with perimeter 6: 2"


def test_count_with_terms(capsys):
    code, out, _ = run(capsys, "count", "3", "3", "--terms")
    assert code == 0
    assert "denominator 4m       12" in out
    assert "exact" in out
    assert out.strip().endswith("3-gons with perimeter 3: 1")


def test_total_command(capsys):
    code, out, _ = run(capsys, "total", "6")
    assert code == 0
    assert "m=4  2" in out
    assert out.strip().splitlines()[-1].split()[:2] == ["total", "5"]


def test_output_file_and_quiet(capsys, isolated_workspace):
    code, out, _ = run(capsys, "sweep", "3", "5", "--output", "out/rows.csv", "--quiet")
    assert code == 0
    assert out == ""
    written = (isolated_workspace / "out" / "rows.csv").read_text(encoding="utf-8")
    assert written.splitlines() == ['"1",3,0', '"1",4,0', '"3",5,2']


def test_output_file_is_replaced_unless_appending(capsys, isolated_workspace):
    run(capsys, "sweep", "3", "4", "--output", "rows.csv", "--quiet")
    run(capsys, "sweep", "5", "5", "--output", "rows.csv", "--quiet")
    target = isolated_workspace / "rows.csv"
    assert target.read_text(encoding="utf-8").splitlines() == ['"3",5,2']

    run(capsys, "sweep", "3", "3", "--output", "rows.csv", "--quiet", "--append")
    assert target.read_text(encoding="utf-8").splitlines() == ['"3",5,2', '"1",3,0', ""]


def test_profile_positional_is_remembered(capsys):
    code, out, _ = run(capsys, "quick", "sweep", "3", "4")
    assert code == 0
    assert out.splitlines()[0].split() == ["n", "log2", "total"]  # quick profile prints a table
    assert config.read_current_profile() == "quick"

    # next run without a profile reuses it
    code, out, _ = run(capsys, "sweep", "3", "3")
    assert out.splitlines()[0].split() == ["n", "log2", "total"]


def test_profiles_and_where(capsys, isolated_workspace):
    code, out, _ = run(capsys, "profiles")
    assert code == 0
    assert "quick" in out and "default" in out

    code, out, _ = run(capsys, "where")
    assert code == 0
    assert str(isolated_workspace.resolve()) in out


def test_profiles_marks_last_used(capsys):
    run(capsys, "quick", "sweep", "3", "3")
    code, out, _ = run(capsys, "profiles")
    assert code == 0
    marked = [line.split()[1] for line in out.splitlines() if line.strip().startswith("*")]
    assert marked == ["quick"]


def test_init_copies_missing_profiles_only(capsys, isolated_workspace):
    code, out, _ = run(capsys, "init")
    assert code == 0
    assert "default" in out.splitlines()[-1]

    edited = isolated_workspace / "profiles" / "quick.toml"
    edited.write_text("[SWEEP]\nN_MAX = 9\n", encoding="utf-8")
    code, out, _ = run(capsys, "init")
    assert code == 0
    assert out.splitlines()[-1] == "Profiles copied: none, all present"
    assert edited.read_text(encoding="utf-8") == "[SWEEP]\nN_MAX = 9\n"


# ---------- errors ------------------------------------------------------------

USER_ERRORS = [
    ["count", "5", "3"],
    ["count", "2", "5"],
    ["count", "3"],
    ["sweep", "9", "4"],
    ["sweep", "3", "4", "5"],
    ["total"],
    ["nosuchprofile"],
    ["sweep", "3", "4", "--output", "profiles/default.toml"],
    ["sweep", "3", "4", "--output", "out/"],
    ["init", "overwrite"],
]


@pytest.mark.parametrize("argv", USER_ERRORS, ids=[" ".join(a) for a in USER_ERRORS])
def test_user_errors_exit_2(capsys, argv):
    code, _, err = run(capsys, *argv)
    assert code == 2
    assert err.startswith(("Error:", "Invalid input:"))


def test_consistency_failure_exits_1(capsys, monkeypatch):
    monkeypatch.setattr("mgons.formula.totient", lambda z: 1)
    code, out, err = run(capsys, "count", "3", "3")
    assert code == 1
    assert "bad_fraction" in err
    assert "3-gons" not in out


def test_debug_reports_profile_and_timings(capsys):
    code, _, err = run(capsys, "sweep", "3", "4", "--debug")
    assert code == 0
    assert "[debug] active profile: default" in err
    assert "SWEEP.N_MAX" in err
    assert "[debug] n=4 in" in err
