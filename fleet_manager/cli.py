"""Console interface for the fleet manager."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional

from fleet_core.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from fleet_core.logging_utils import configure_root_logger, get_logger, resolve_level
from fleet_core.models import Boat, FleetTotals
from fleet_core.services import FleetStore
from fleet_core.storage import DEFAULT_SNAPSHOT_NAME, SnapshotStorage

LOGGER = get_logger(__name__)

SNAPSHOT_ENV = "FLEET_MANAGER_SNAPSHOT"
LOG_LEVEL_ENV = "FLEET_MANAGER_LOG_LEVEL"

MENU_PROMPT = "(P)rint, (A)dd, (R)emove, (E)xpense, e(X)it : "
ADD_PROMPT = "Please enter the new boat CSV data          : "
REMOVE_PROMPT = "Which boat do you want to remove?           : "
EXPENSE_NAME_PROMPT = "Which boat do you want to spend on?         : "
EXPENSE_AMOUNT_PROMPT = "How much do you want to spend?              : "

# Width of the identity columns in a report row, after the 4-space indent.
_IDENTITY_WIDTH = 52


def _parse_log_level(value: str) -> int:
    try:
        return resolve_level(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _read(prompt: str) -> Optional[str]:
    """Prompt for one line of input; ``None`` at end of input."""
    try:
        return input(prompt)
    except EOFError:
        return None


def _format_boat(boat: Boat) -> str:
    return (
        f"    {boat.category.value:<8} {boat.name:<20} {boat.year:4d} {boat.make_model:<12}"
        f" {boat.length:3d}' : Paid $ {boat.purchase_price:10.2f} : Spent $ {boat.expenses:10.2f}"
    )


def _format_totals(totals: FleetTotals) -> str:
    return (
        f"    {'Total':<{_IDENTITY_WIDTH}} : Paid $ {totals.total_paid:10.2f}"
        f" : Spent $ {totals.total_spent:10.2f}"
    )


def handle_print(store: FleetStore) -> None:
    print("\nFleet report:")
    for boat in store.list():
        print(_format_boat(boat))
    print(_format_totals(store.totals()))


def handle_add(store: FleetStore) -> None:
    line = _read(ADD_PROMPT) or ""
    try:
        store.add_record(line)
    except ValidationError as exc:
        print(f"Error adding boat: {exc}")


def handle_remove(store: FleetStore) -> None:
    name = (_read(REMOVE_PROMPT) or "").strip()
    if store.remove(name):
        print("Boat removed.")
    else:
        print(f"Cannot find boat {name}")


def handle_expense(store: FleetStore) -> None:
    name = (_read(EXPENSE_NAME_PROMPT) or "").strip()
    try:
        store.get(name)
    except RecordNotFoundError as exc:
        print(str(exc))
        return

    raw_amount = _read(EXPENSE_AMOUNT_PROMPT) or ""
    try:
        decision = store.charge_expense(name, raw_amount)
    except ValidationError as exc:
        print(f"Invalid amount: {exc}")
        return

    if decision.authorized:
        print(f"Expense authorized, ${decision.amount:.2f} spent.")
    else:
        print(f"Expense not permitted, only $ {decision.remaining_budget:.2f} left to spend.")


def handle_exit(store: FleetStore) -> None:
    try:
        store.save_snapshot()
    except PersistenceError as exc:
        LOGGER.warning("Snapshot not saved: %s", exc)
        print(f"Error saving fleet data: {exc}")
    print("Exiting the Fleet Management System")


COMMANDS: Dict[str, Callable[[FleetStore], None]] = {
    "P": handle_print,
    "A": handle_add,
    "R": handle_remove,
    "E": handle_expense,
}


def run_menu(store: FleetStore) -> None:
    """Read single-letter commands until e(X)it or end of input."""
    print("Welcome to the Fleet Management System")
    print("--------------------------------------")

    while True:
        raw = _read(MENU_PROMPT)
        if raw is None:
            print()
            handle_exit(store)
            return
        token = raw.strip()
        if not token:
            continue
        choice = token[0].upper()
        if choice == "X":
            handle_exit(store)
            return
        handler = COMMANDS.get(choice)
        if handler is None:
            print("Invalid menu option, try again")
            continue
        handler(store)


def load_fleet(store: FleetStore, csv_file: Optional[Path]) -> None:
    """Populate the store from the import file when given, else from the snapshot."""
    if csv_file is not None:
        try:
            store.import_delimited(csv_file)
        except PersistenceError as exc:
            print(f"Error reading CSV file: {exc}")
        return

    if not store.load_snapshot():
        print("No serialized data found, starting with an empty fleet.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sailing club fleet manager")
    parser.add_argument(
        "csv_file",
        nargs="?",
        type=Path,
        help="Delimited file of boats to import instead of loading the snapshot",
    )
    parser.add_argument(
        "--snapshot",
        default=os.getenv(SNAPSHOT_ENV, DEFAULT_SNAPSHOT_NAME),
        type=Path,
        help=f"Snapshot file loaded at startup and written on exit (default: ./{DEFAULT_SNAPSHOT_NAME})",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, "WARNING"),
        type=_parse_log_level,
        help="Diagnostics written to stderr (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_root_logger(args.log_level)

    store = FleetStore(SnapshotStorage(args.snapshot))
    load_fleet(store, args.csv_file)
    run_menu(store)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
