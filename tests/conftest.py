"""Shared pytest fixtures for fleet manager tests."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator

import pytest

from fleet_core import logging_utils
from fleet_core.models import Boat, BoatCategory
from fleet_core.services import FleetStore
from fleet_core.storage import SnapshotStorage

from fleet_samples import SAMPLE_LINES


@pytest.fixture(autouse=True)
def isolate_root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Undo any handler the CLI installs so streams from other tests are never reused."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(logging_utils, "_LOGGER_INITIALISED", False)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "FleetData.json"


@pytest.fixture
def store(snapshot_path: Path) -> FleetStore:
    return FleetStore(SnapshotStorage(snapshot_path))


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "fleet.csv"
    path.write_text("\n".join(SAMPLE_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def eagle() -> Boat:
    return Boat(
        category=BoatCategory.SAILING,
        name="Eagle",
        year=2015,
        make_model="Catalina 22",
        length=22,
        purchase_price=Decimal("18000.00"),
    )
