"""Domain models for traineeboard.

Pure Python dataclasses representing domain entities.
These models are independent of the API layer and are what the
store hands out. They are frozen: edits go through the store, which
replaces records instead of mutating them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

# ============================================================================
# Trainee Domain
# ============================================================================


@dataclass(frozen=True)
class Trainee:
    """Domain model for an enrolled trainee."""

    id: int
    name: str
    email: str
    registration_date: date
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None


# ============================================================================
# Test Result Domain
# ============================================================================


@dataclass(frozen=True)
class TestResult:
    """Domain model for one graded test.

    trainee_name is a copy of the trainee's name taken when the result
    was recorded. It is not kept in sync with later renames.
    """

    __test__ = False  # not a pytest test class

    id: int
    trainee_id: int
    trainee_name: str
    subject: str
    grade: float
    test_date: date


# ============================================================================
# Derived Values
# ============================================================================

Trend = Literal["improving", "declining", "stable", "insufficient-data"]
PassLabel = Literal["Passed", "Failed"]
GradeClass = Literal["excellent", "good", "poor"]
