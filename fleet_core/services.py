"""Framework-agnostic business services for the fleet manager."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .logging_utils import get_logger
from .models import ZERO, Boat, ExpenseDecision, FleetTotals
from .storage import SnapshotStorage, read_lines
from .validators import decode_line, parse_money, parse_record, validate_boat_fields

LOGGER = get_logger(__name__)

_SNAPSHOT_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError)


class FleetStore:
    """Ordered collection of boats; insertion order is display order."""

    def __init__(
        self,
        storage: Optional[SnapshotStorage] = None,
        boats: Optional[Iterable[Boat]] = None,
    ) -> None:
        self._storage = storage or SnapshotStorage()
        self._boats: List[Boat] = list(boats or [])

    def __len__(self) -> int:
        return len(self._boats)

    # Persistence ----------------------------------------------------------
    def import_delimited(self, source: Union[str, Path, Iterable[Union[str, bytes]]]) -> int:
        """Append every well-formed ``CATEGORY,NAME,YEAR,MAKE_MODEL,LENGTH,PRICE`` line.

        ``source`` is a path or an iterable of lines. Blank lines are ignored;
        malformed or undecodable lines are skipped one at a time and the rest
        of the file still imports.
        Returns the number of boats added.
        """
        lines = read_lines(source) if isinstance(source, (str, Path)) else source
        added = 0
        skipped = 0
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                fields = parse_record(decode_line(line))
            except ValidationError as exc:
                skipped += 1
                LOGGER.debug("Skipping line %d: %s", line_number, exc)
                continue
            self._boats.append(Boat(**fields))
            added += 1
        LOGGER.info("Imported %d boats (%d malformed lines skipped)", added, skipped)
        return added

    def load_snapshot(self, path: Union[str, Path, None] = None) -> int:
        """Append the boats held in a snapshot file.

        A missing or unreadable snapshot is treated as an empty one: nothing
        is added and 0 is returned. Either every entry loads or none does.
        """
        storage = SnapshotStorage(path) if path is not None else self._storage
        try:
            boats = [_hydrate(payload) for payload in storage.load()]
        except PersistenceError as exc:
            LOGGER.warning("Ignoring unreadable snapshot: %s", exc)
            return 0
        except _SNAPSHOT_ERRORS as exc:
            LOGGER.warning("Ignoring invalid snapshot %s: %s", storage.path, exc)
            return 0
        self._boats.extend(boats)
        LOGGER.info("Loaded %d boats from %s", len(boats), storage.path)
        return len(boats)

    def save_snapshot(self, path: Union[str, Path, None] = None) -> None:
        storage = SnapshotStorage(path) if path is not None else self._storage
        storage.save(boat.to_dict() for boat in self._boats)

    # Queries --------------------------------------------------------------
    def list(self) -> List[Boat]:
        return list(self._boats)

    def totals(self) -> FleetTotals:
        return FleetTotals(
            count=len(self._boats),
            total_paid=sum((boat.purchase_price for boat in self._boats), start=ZERO),
            total_spent=sum((boat.expenses for boat in self._boats), start=ZERO),
        )

    def get(self, name: str) -> Boat:
        """Return the first boat whose name matches, ignoring case."""
        return self._boats[self._index_or_raise(name)]

    # Mutations ------------------------------------------------------------
    def add(
        self,
        category: object,
        name: object,
        year: object,
        make_model: object,
        length: object,
        purchase_price: object,
    ) -> Boat:
        fields = validate_boat_fields(category, name, year, make_model, length, purchase_price)
        boat = Boat(**fields)
        self._boats.append(boat)
        LOGGER.info("Added boat %s", boat.name)
        return boat

    def add_record(self, line: str) -> Boat:
        """Add a boat from one delimited record line."""
        return self.add(**parse_record(line))

    def remove(self, name: str) -> bool:
        index = self._find_index(name)
        if index is None:
            return False
        removed = self._boats.pop(index)
        LOGGER.info("Removed boat %s", removed.name)
        return True

    def charge_expense(self, name: str, amount: object) -> ExpenseDecision:
        """Spend ``amount`` on a boat if it fits inside its remaining budget.

        Over-budget requests leave the boat untouched and come back with
        ``authorized=False`` and the current remaining budget. Negative
        amounts are rejected so expenses can never shrink.
        """
        index = self._index_or_raise(name)
        spend = parse_money(amount, "amount")
        boat = self._boats[index]
        if spend > boat.remaining_budget:
            LOGGER.info(
                "Expense of %s on %s refused; %s left", spend, boat.name, boat.remaining_budget
            )
            return ExpenseDecision(
                boat=boat, amount=spend, authorized=False, remaining_budget=boat.remaining_budget
            )

        updated = replace(boat, expenses=boat.expenses + spend)
        self._boats[index] = updated
        LOGGER.info("Expense of %s on %s authorized", spend, updated.name)
        return ExpenseDecision(
            boat=updated, amount=spend, authorized=True, remaining_budget=updated.remaining_budget
        )

    # Internal helpers -----------------------------------------------------
    def _find_index(self, name: str) -> Optional[int]:
        for index, boat in enumerate(self._boats):
            if boat.matches(name):
                return index
        return None

    def _index_or_raise(self, name: str) -> int:
        index = self._find_index(name)
        if index is None:
            raise RecordNotFoundError(f"Cannot find boat {name.strip()}")
        return index


def _hydrate(payload: object) -> Boat:
    if not isinstance(payload, dict):
        raise TypeError("snapshot entries must be objects")
    boat = Boat.from_dict(payload)
    # Snapshot entries obey the same field rules as imported records.
    validate_boat_fields(
        boat.category, boat.name, boat.year, boat.make_model, boat.length, boat.purchase_price
    )
    parse_money(boat.expenses, "expenses")
    return boat
