"""Scripted console sessions against the fleet manager menu."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from fleet_samples import EAGLE_LINE
from fleet_core.services import FleetStore
from fleet_core.storage import SnapshotStorage
from fleet_manager import cli


def _feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("".join(f"{line}\n" for line in lines)))


def _run(store: FleetStore, monkeypatch: pytest.MonkeyPatch, capsys, *lines: str) -> str:
    _feed(monkeypatch, *lines)
    cli.run_menu(store)
    return capsys.readouterr().out


@pytest.fixture
def eagle_store(store: FleetStore) -> FleetStore:
    store.import_delimited([EAGLE_LINE])
    return store


def test_print_shows_rows_and_aligned_totals(eagle_store, monkeypatch, capsys) -> None:
    out = _run(eagle_store, monkeypatch, capsys, "P", "X")

    row = "    SAILING  Eagle" + " " * 16 + "2015 Catalina 22   22' : Paid $   18000.00 : Spent $       0.00"
    assert "Fleet report:" in out
    assert row in out.splitlines()
    total = next(line for line in out.splitlines() if line.strip().startswith("Total"))
    assert total.index(": Paid $") == row.index(": Paid $")
    assert total.endswith(": Paid $   18000.00 : Spent $       0.00")


def test_expense_scenario(eagle_store, monkeypatch, capsys) -> None:
    out = _run(eagle_store, monkeypatch, capsys, "E", "Eagle", "5000", "e", "eagle", "14000", "X")

    assert "Expense authorized, $5000.00 spent." in out
    assert "Expense not permitted, only $ 13000.00 left to spend." in out


def test_expense_for_unknown_boat_does_not_ask_for_amount(eagle_store, monkeypatch, capsys) -> None:
    out = _run(eagle_store, monkeypatch, capsys, "E", "Ghost", "X")

    assert "Cannot find boat Ghost" in out
    assert cli.EXPENSE_AMOUNT_PROMPT not in out
    assert "Exiting the Fleet Management System" in out


def test_expense_with_bad_amount_is_reported(eagle_store, monkeypatch, capsys) -> None:
    out = _run(eagle_store, monkeypatch, capsys, "E", "Eagle", "plenty", "X")

    assert "Invalid amount: amount must be a numeric value" in out
    assert eagle_store.get("Eagle").expenses == 0


def test_add_and_remove(store, monkeypatch, capsys) -> None:
    out = _run(
        store, monkeypatch, capsys,
        "A", "POWER,Big Brother,2019,Mako,20,12000.00",
        "R", "big brother",
        "R", "Ghost",
        "X",
    )

    assert "Boat removed." in out
    assert "Cannot find boat Ghost" in out
    assert len(store) == 0


def test_add_reports_error_and_adds_nothing(store, monkeypatch, capsys) -> None:
    out = _run(store, monkeypatch, capsys, "A", "SAILING,Eagle,soon,Catalina 22,22,18000", "X")

    assert "Error adding boat: year must be a whole number" in out
    assert len(store) == 0


def test_unknown_and_blank_commands(store, monkeypatch, capsys) -> None:
    out = _run(store, monkeypatch, capsys, "", "z", "Xylophone")

    assert out.count("Invalid menu option, try again") == 1
    assert "Exiting the Fleet Management System" in out


def test_exit_saves_snapshot(eagle_store, snapshot_path, monkeypatch, capsys) -> None:
    _run(eagle_store, monkeypatch, capsys, "E", "Eagle", "250", "X")

    saved = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert [entry["name"] for entry in saved] == ["Eagle"]
    assert saved[0]["expenses"] == "250.00"


def test_end_of_input_saves_like_exit(eagle_store, snapshot_path, monkeypatch, capsys) -> None:
    out = _run(eagle_store, monkeypatch, capsys, "P")

    assert snapshot_path.exists()
    assert "Exiting the Fleet Management System" in out


def test_save_failure_still_exits(tmp_path: Path, monkeypatch, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FleetStore(SnapshotStorage(blocker / "FleetData.json"))

    out = _run(store, monkeypatch, capsys, "X")

    assert "Error saving fleet data: Unable to write" in out
    assert out.rstrip().endswith("Exiting the Fleet Management System")


# main() ------------------------------------------------------------------------
def test_main_imports_csv_then_saves(sample_csv, snapshot_path, monkeypatch, capsys) -> None:
    _feed(monkeypatch, "P", "X")

    assert cli.main([str(sample_csv), "--snapshot", str(snapshot_path)]) == 0

    out = capsys.readouterr().out
    assert "Welcome to the Fleet Management System" in out
    assert "Moon Glow" in out
    assert len(json.loads(snapshot_path.read_text(encoding="utf-8"))) == 3


def test_main_reloads_previous_snapshot(sample_csv, snapshot_path, monkeypatch, capsys) -> None:
    _feed(monkeypatch, "E", "Eagle", "5000", "X")
    cli.main([str(sample_csv), "--snapshot", str(snapshot_path)])

    _feed(monkeypatch, "E", "Eagle", "14000", "X")
    cli.main(["--snapshot", str(snapshot_path)])

    out = capsys.readouterr().out
    assert "Expense not permitted, only $ 13000.00 left to spend." in out
    assert "No serialized data found" not in out


def test_main_without_snapshot_starts_empty(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(cli.SNAPSHOT_ENV, raising=False)
    _feed(monkeypatch, "X")

    assert cli.main([]) == 0

    out = capsys.readouterr().out
    assert "No serialized data found, starting with an empty fleet." in out
    assert (tmp_path / "FleetData.json").exists()


def test_main_with_empty_snapshot_reports_empty_fleet(snapshot_path, monkeypatch, capsys) -> None:
    snapshot_path.write_text("[]", encoding="utf-8")
    _feed(monkeypatch, "X")

    cli.main(["--snapshot", str(snapshot_path)])

    assert "No serialized data found, starting with an empty fleet." in capsys.readouterr().out


def test_main_reports_unreadable_csv(tmp_path, snapshot_path, monkeypatch, capsys) -> None:
    _feed(monkeypatch, "X")

    cli.main([str(tmp_path / "missing.csv"), "--snapshot", str(snapshot_path)])

    assert "Error reading CSV file: Unable to read" in capsys.readouterr().out


def test_snapshot_path_from_environment(tmp_path, monkeypatch, capsys) -> None:
    target = tmp_path / "club.json"
    monkeypatch.setenv(cli.SNAPSHOT_ENV, str(target))
    _feed(monkeypatch, "X")

    cli.main([])

    assert target.exists()


def test_bad_log_level_is_a_usage_error(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--log-level", "chatty"])
    assert excinfo.value.code == 2
