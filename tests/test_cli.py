"""Tests for the pygeiger command-line host."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pygeiger import cli

OWNER = "geiger1" + "0" * 38
ALICE = "geiger1" + "a" * 38
BOB = "geiger1" + "c" * 38


@pytest.fixture
def run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    for key in ("GEIGER_DB_PATH", "GEIGER_ADDRESS_PREFIX", "GEIGER_VALIDATE_ADDRESSES"):
        monkeypatch.delenv(key, raising=False)
    db = str(tmp_path / "cli.sqlite3")

    def _run(*argv: str) -> tuple[int, str, str]:
        code = cli.main(["--db", db, *argv])
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_full_session(run) -> None:
    assert run("init", "--sender", OWNER) == (0, '{"action": "instantiate"}\n', "")

    code, out, _ = run("measure", "--sender", ALICE, "--time", "0")
    assert code == 0
    assert json.loads(out) == {"action": "try_measure", "current_time": "0"}
    run("measure", "--sender", ALICE, "--time", "86400")
    run("measure", "--sender", BOB, "--time", "86400")

    assert run("radioactivity", ALICE)[1] == "2\n"
    assert json.loads(run("config")[1]) == {"owner": OWNER}
    assert json.loads(run("leaderboard", "--json")[1]) == [[ALICE, 2], [BOB, 1]]

    code, out, _ = run("leaderboard")
    assert code == 0
    assert out.splitlines() == [f"  1. {ALICE}  2", f"  2. {BOB}  1"]


def test_library_errors_exit_nonzero(run) -> None:
    run("init", "--sender", OWNER)
    run("measure", "--sender", ALICE, "--time", "0")

    code, out, err = run("measure", "--sender", ALICE, "--time", "10")
    assert code == 1
    assert out == ""
    assert err.startswith("error: measurement limited")

    code, _, err = run("reset", "--sender", ALICE)
    assert code == 1
    assert "owner" in err

    code, _, err = run("radioactivity", BOB)
    assert code == 1
    assert err.startswith("error: no radioactivity recorded")


def test_prefix_option_restricts_queries(run) -> None:
    run("init", "--sender", OWNER)
    run("measure", "--sender", ALICE, "--time", "0")

    code, _, err = run("--prefix", "juno", "radioactivity", ALICE)
    assert code == 1
    assert "prefix" in err


def test_reset_and_migrate(run) -> None:
    run("init", "--sender", OWNER)
    run("measure", "--sender", ALICE, "--time", "0")

    assert run("reset", "--sender", OWNER)[1] == '{"method": "try_reset"}\n'
    assert run("radioactivity", ALICE)[1] == "0\n"
    assert run("migrate") == (0, "{}\n", "")


def test_time_outside_u64_is_rejected_by_the_parser(run, capsys: pytest.CaptureFixture[str]) -> None:
    run("init", "--sender", OWNER)

    with pytest.raises(SystemExit) as exc_info:
        run("measure", "--sender", ALICE, "--time", str(2**64))
    assert exc_info.value.code == 2
    assert "time must be between 0 and" in capsys.readouterr().err


def test_empty_sender_exits_nonzero(run) -> None:
    run("init", "--sender", OWNER)

    code, out, err = run("measure", "--sender", "", "--time", "0")
    assert code == 1
    assert out == ""
    assert err.startswith("error: invalid sender")


def test_db_path_falls_back_to_env_then_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    for key in ("GEIGER_ADDRESS_PREFIX", "GEIGER_VALIDATE_ADDRESSES"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    monkeypatch.setenv("GEIGER_DB_PATH", str(tmp_path / "env.sqlite3"))
    assert cli.main(["init", "--sender", OWNER]) == 0
    assert (tmp_path / "env.sqlite3").exists()

    monkeypatch.delenv("GEIGER_DB_PATH")
    assert cli.main(["init", "--sender", OWNER]) == 0
    assert (tmp_path / cli.DEFAULT_DB_PATH).exists()
    capsys.readouterr()
