"""Shared pytest fixtures for traineeboard tests."""

from datetime import date

import pytest

from traineeboard.models.domain import TestResult, Trainee
from traineeboard.store.snapshot import DataSnapshot, DataStore


def make_result(
    grade: float,
    test_date: date = date(2024, 1, 1),
    result_id: int = 1,
    trainee_id: int = 1,
    trainee_name: str = "Alice Smith",
    subject: str = "Mathematics",
) -> TestResult:
    """Build a TestResult with defaults for the fields a test doesn't care about."""
    return TestResult(
        id=result_id,
        trainee_id=trainee_id,
        trainee_name=trainee_name,
        subject=subject,
        grade=grade,
        test_date=test_date,
    )


def results_from_grades(grades: list[float], trainee_id: int = 1) -> list[TestResult]:
    """One result per grade, on consecutive days in list order."""
    return [
        make_result(
            grade,
            test_date=date(2024, 1, 1 + i),
            result_id=i + 1,
            trainee_id=trainee_id,
        )
        for i, grade in enumerate(grades)
    ]


@pytest.fixture
def trainees() -> list[Trainee]:
    """Three trainees; Carol has no test results."""
    return [
        Trainee(
            id=1,
            name="Alice Smith",
            email="alice@example.com",
            registration_date=date(2024, 1, 1),
        ),
        Trainee(
            id=2,
            name="Bob Jones",
            email="bob@example.com",
            registration_date=date(2024, 1, 2),
            city="Haifa",
        ),
        Trainee(
            id=3,
            name="Carol White",
            email="carol@sample.org",
            registration_date=date(2024, 1, 3),
        ),
    ]


@pytest.fixture
def test_results() -> list[TestResult]:
    """Results for Alice (improving) and Bob (failing), plus one dangling record."""
    return [
        make_result(60, date(2024, 2, 1), result_id=1, subject="Mathematics"),
        make_result(70, date(2024, 3, 1), result_id=2, subject="Physics"),
        make_result(95, date(2024, 4, 1), result_id=3, subject="English"),
        make_result(
            40,
            date(2024, 2, 15),
            result_id=4,
            trainee_id=2,
            trainee_name="Bob Jones",
            subject="Mathematics",
        ),
        make_result(
            55,
            date(2024, 3, 15),
            result_id=5,
            trainee_id=2,
            trainee_name="Bob Jones",
            subject="Chemistry",
        ),
        make_result(
            88,
            date(2024, 5, 1),
            result_id=6,
            trainee_id=99,
            trainee_name="Former Trainee",
            subject="Physics",
        ),
    ]


@pytest.fixture
def store(trainees, test_results) -> DataStore:
    """Store seeded with the trainees and test_results fixtures."""
    return DataStore(
        DataSnapshot(
            subjects=("Mathematics", "Physics", "English", "Chemistry"),
            trainees=tuple(trainees),
            test_results=tuple(test_results),
        )
    )
