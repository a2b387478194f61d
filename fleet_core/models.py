"""Data models for the fleet manager domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from .exceptions import ValidationError

__all__ = ["Boat", "BoatCategory", "ExpenseDecision", "FleetTotals"]

ZERO = Decimal("0.00")


class BoatCategory(str, Enum):
    """Closed set of hull categories kept by the club."""

    SAILING = "SAILING"
    POWER = "POWER"

    @classmethod
    def from_str(cls, value: object) -> "BoatCategory":
        """Coerce arbitrary casing into a category, rejecting unknown names."""

        if not isinstance(value, str):
            raise ValidationError("category must be a string")
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(f"category must be one of: {allowed} (got '{value}')") from exc

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Boat:
    category: BoatCategory
    name: str
    year: int
    make_model: str
    length: int
    purchase_price: Decimal
    expenses: Decimal = ZERO

    @property
    def remaining_budget(self) -> Decimal:
        return self.purchase_price - self.expenses

    def matches(self, name: str) -> bool:
        """Case-insensitive comparison against the boat's name."""
        return self.name.lower() == name.strip().lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the boat to JSON-friendly natives."""
        return {
            "category": self.category.value,
            "name": self.name,
            "year": self.year,
            "make_model": self.make_model,
            "length": self.length,
            "purchase_price": f"{self.purchase_price:.2f}",
            "expenses": f"{self.expenses:.2f}",
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Boat":
        """Hydrate a Boat from JSON-native data."""
        return cls(
            category=BoatCategory.from_str(data["category"]),
            name=data["name"],
            year=int(data["year"]),
            make_model=data["make_model"],
            length=int(data["length"]),
            purchase_price=Decimal(str(data["purchase_price"])),
            expenses=Decimal(str(data.get("expenses", ZERO))),
        )


@dataclass(frozen=True)
class FleetTotals:
    count: int
    total_paid: Decimal
    total_spent: Decimal


@dataclass(frozen=True)
class ExpenseDecision:
    """Outcome of an expense request against a boat's remaining budget.

    ``remaining_budget`` is the value after the charge when ``authorized`` is
    true, and the untouched budget otherwise.
    """

    boat: Boat
    amount: Decimal
    authorized: bool
    remaining_budget: Decimal
