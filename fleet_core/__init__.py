"""Core business logic package for the fleet manager."""

from .models import Boat, BoatCategory, ExpenseDecision, FleetTotals
from .services import FleetStore
from .storage import DEFAULT_SNAPSHOT_NAME, SnapshotStorage
from .exceptions import PersistenceError, ValidationError, RecordNotFoundError

__all__ = [
    "Boat",
    "BoatCategory",
    "ExpenseDecision",
    "FleetTotals",
    "FleetStore",
    "SnapshotStorage",
    "DEFAULT_SNAPSHOT_NAME",
    "PersistenceError",
    "ValidationError",
    "RecordNotFoundError",
]
