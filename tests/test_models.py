"""Tests for pydantic models.

Tests validate:
1. Submissions accept valid data and reject invalid data
2. Literal constraints are enforced
3. Integer grades stay integers when serialized
"""

from datetime import date

import pytest
from pydantic import ValidationError

from traineeboard.models.types import (
    GradeRange,
    MonitorRow,
    TestResultCreate,
    TestResultUpdate,
    TraineeCreate,
)


def monitor_row(**overrides) -> MonitorRow:
    data = {
        "id": 1,
        "name": "Alice Smith",
        "average": 75,
        "status": "Passed",
        "total_tests": 3,
        "passed_tests": 3,
        "last_test_date": date(2024, 4, 1),
        "trend": "improving",
        "highest_grade": 95,
        "lowest_grade": 60,
        "standard_deviation": 15,
    }
    data.update(overrides)
    return MonitorRow(**data)


class TestTraineeCreate:
    """Test TraineeCreate model."""

    def test_registration_date_optional(self):
        payload = TraineeCreate(name="Dan Brown", email="dan@example.com")
        assert payload.registration_date is None

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            TraineeCreate(name="", email="dan@example.com")


class TestTestResultModels:
    """Test test result submissions."""

    def test_create_parses_date(self):
        payload = TestResultCreate(
            trainee_id=1, subject="Physics", grade=80, test_date="2024-03-01"
        )
        assert payload.test_date == date(2024, 3, 1)

    def test_create_requires_grade(self):
        with pytest.raises(ValidationError):
            TestResultCreate(trainee_id=1, subject="Physics")

    def test_update_all_optional(self):
        payload = TestResultUpdate()
        assert (payload.subject, payload.grade, payload.test_date) == (None, None, None)


class TestMonitorRow:
    """Test MonitorRow model."""

    def test_valid_row(self):
        assert monitor_row().status == "Passed"

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            monitor_row(status="Pending")

    def test_invalid_trend_rejected(self):
        with pytest.raises(ValidationError):
            monitor_row(trend="rising")

    def test_no_tests_date_is_null(self):
        assert monitor_row(last_test_date=None).model_dump()["last_test_date"] is None


class TestGradeRange:
    """Test grade typing."""

    def test_integer_grades_stay_integers(self):
        extremes = GradeRange(highest=95, lowest=60, range=35)
        assert extremes.model_dump_json() == '{"highest":95,"lowest":60,"range":35}'

    def test_fractional_grades_kept(self):
        assert GradeRange(highest=92.5, lowest=60, range=32.5).highest == 92.5
