"""Seed data loading.

Reads the dashboard's JSON seed file:

    {"subjects": [...], "trainees": [...], "testResults": [...]}

Keys are camelCase and dates are ISO strings. Unknown keys (e.g.
"courses") are ignored. If the file is missing or invalid the store
starts from a small built-in fallback data set instead.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from traineeboard.models.domain import TestResult, Trainee
from traineeboard.store.snapshot import DataSnapshot, DataStore

logger = logging.getLogger(__name__)

DATA_PATH_ENV = "TRAINEEBOARD_DATA_PATH"
DEFAULT_DATA_PATH = Path(__file__).with_name("demo_data.json")


class _SeedModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _parse_date(value: object) -> object:
    # Accept full timestamps ("2024-03-01T09:30:00Z") as well as plain dates
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


SeedDate = Annotated[date, BeforeValidator(_parse_date)]


class SeedTrainee(_SeedModel):
    id: int
    name: str
    email: str
    registration_date: SeedDate
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None


class SeedTestResult(_SeedModel):
    id: int
    trainee_id: int
    trainee_name: str
    subject: str
    grade: int | float
    test_date: SeedDate


class SeedData(_SeedModel):
    """Validated contents of a seed file."""

    subjects: list[str] = []
    trainees: list[SeedTrainee] = []
    test_results: list[SeedTestResult] = []

    def to_snapshot(self) -> DataSnapshot:
        """Convert validated seed data into a store snapshot."""
        return DataSnapshot(
            subjects=tuple(self.subjects),
            trainees=tuple(Trainee(**t.model_dump()) for t in self.trainees),
            test_results=tuple(TestResult(**r.model_dump()) for r in self.test_results),
        )


def fallback_snapshot() -> DataSnapshot:
    """Minimal data set used when the seed file cannot be loaded."""
    today = date.today()
    return DataSnapshot(
        subjects=("Mathematics", "English", "Computer Science", "Physics", "Chemistry"),
        trainees=(
            Trainee(
                id=1,
                name="Demo Student",
                email="demo@example.com",
                registration_date=today,
            ),
        ),
        test_results=(
            TestResult(
                id=1,
                trainee_id=1,
                trainee_name="Demo Student",
                subject="Mathematics",
                grade=85,
                test_date=today,
            ),
        ),
    )


def resolve_data_path(path: Path | None = None) -> Path:
    """Pick the seed file: explicit path, then $TRAINEEBOARD_DATA_PATH, then bundled demo."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(DATA_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_DATA_PATH


def parse_seed(raw: str) -> DataSnapshot:
    """Parse seed JSON text into a snapshot.

    Raises:
        ValueError: If the text is not valid JSON or does not match the
            seed layout (json.JSONDecodeError / pydantic.ValidationError).
    """
    return SeedData.model_validate(json.loads(raw)).to_snapshot()


def load_snapshot(path: Path | None = None) -> DataSnapshot:
    """Load seed data, falling back to built-in data on failure.

    Args:
        path: Seed file. See resolve_data_path() for the default.

    Returns:
        DataSnapshot with the seed contents, or fallback_snapshot() if the
        file cannot be read or parsed.
    """
    data_path = resolve_data_path(path)
    try:
        snapshot = parse_seed(data_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Failed to load seed data from %s, using fallback: %s", data_path, e)
        return fallback_snapshot()

    logger.info(
        "Loaded %d trainees and %d test results from %s",
        len(snapshot.trainees),
        len(snapshot.test_results),
        data_path,
    )
    return snapshot


def create_store(path: Path | None = None) -> DataStore:
    """Create a DataStore seeded from load_snapshot()."""
    return DataStore(load_snapshot(path))
