"""Per-trainee monitoring summaries.

Every trainee yields exactly one row, in input order, even with no tests.
Test results pointing at an unknown trainee are ignored.
Everything is recomputed from the given collections on each call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from traineeboard.metrics import grades
from traineeboard.metrics.status import pass_label
from traineeboard.models.domain import TestResult, Trainee
from traineeboard.models.types import MonitorRow, TraineeDetail, TraineeStatus


@dataclass(frozen=True)
class TrendPolicy:
    """How many results a trainee needs before a trend is reported."""

    min_samples: int


# Monitor table: trend from two results onwards
MONITOR_TREND = TrendPolicy(min_samples=2)

# Trainee status view: trend from three results onwards
STATUS_TREND = TrendPolicy(min_samples=3)


def group_by_trainee(test_results: Iterable[TestResult]) -> dict[int, list[TestResult]]:
    """Group results by trainee_id, keeping source order within each group."""
    groups: dict[int, list[TestResult]] = {}
    for result in test_results:
        groups.setdefault(result.trainee_id, []).append(result)
    return groups


def last_test_date(results: Sequence[TestResult]) -> date | None:
    """Date of the most recent test, or None when there are none."""
    if not results:
        return None
    return grades.sort_by_date(results)[-1].test_date


def trainee_detail(trainee: Trainee) -> TraineeDetail:
    """Convert a Trainee entity to its API model."""
    return TraineeDetail(
        id=trainee.id,
        name=trainee.name,
        email=trainee.email,
        registration_date=trainee.registration_date,
        address=trainee.address,
        city=trainee.city,
        country=trainee.country,
        zip=trainee.zip,
    )


def _monitor_row(
    trainee: Trainee,
    results: list[TestResult],
    trend_policy: TrendPolicy,
) -> MonitorRow:
    average = grades.average(results)
    pass_fail = grades.pass_fail_stats(results, grades.PASSING_GRADE)
    extremes = grades.grade_range(results)

    return MonitorRow(
        id=trainee.id,
        name=trainee.name,
        average=average,
        status=pass_label(average),
        total_tests=len(results),
        passed_tests=pass_fail.passed,
        last_test_date=last_test_date(results),
        trend=grades.improvement_trend(results, trend_policy.min_samples),
        highest_grade=extremes.highest,
        lowest_grade=extremes.lowest,
        standard_deviation=grades.standard_deviation(results),
    )


def build_monitor_view(
    trainees: Iterable[Trainee],
    test_results: Iterable[TestResult],
    *,
    trend_policy: TrendPolicy = MONITOR_TREND,
) -> list[MonitorRow]:
    """Build one monitor row per trainee.

    Args:
        trainees: Trainees, in display order.
        test_results: All test results; unmatched ones are ignored.
        trend_policy: Minimum results for a trend classification.

    Returns:
        MonitorRow list aligned with trainees. Trainees without tests get
        zeroed statistics, status 'Failed' and trend 'insufficient-data'.
    """
    by_trainee = group_by_trainee(test_results)
    return [
        _monitor_row(trainee, by_trainee.get(trainee.id, []), trend_policy)
        for trainee in trainees
    ]


def _trainee_status(
    trainee: Trainee,
    results: list[TestResult],
    trend_policy: TrendPolicy,
) -> TraineeStatus:
    average = grades.average(results)
    pass_fail = grades.pass_fail_stats(results, grades.PASSING_GRADE)
    extremes = grades.grade_range(results)

    return TraineeStatus(
        trainee=trainee_detail(trainee),
        average_grade=average,
        median_grade=grades.median(results),
        is_passed=average >= grades.PASSING_GRADE,
        test_count=len(results),
        passed_tests=pass_fail.passed,
        pass_rate=pass_fail.pass_rate,
        last_test_date=last_test_date(results),
        trend=grades.improvement_trend(results, trend_policy.min_samples),
        highest_grade=extremes.highest if results else None,
        lowest_grade=extremes.lowest if results else None,
        standard_deviation=grades.standard_deviation(results),
        distribution=grades.grade_distribution(results),
    )


def build_status_view(
    trainees: Iterable[Trainee],
    test_results: Iterable[TestResult],
    *,
    trend_policy: TrendPolicy = STATUS_TREND,
) -> list[TraineeStatus]:
    """Build one TraineeStatus per trainee.

    Same trend rule as the monitor view, but by default a trend needs
    three results instead of two. Highest and lowest grade are None for a
    trainee without tests.
    """
    by_trainee = group_by_trainee(test_results)
    return [
        _trainee_status(trainee, by_trainee.get(trainee.id, []), trend_policy)
        for trainee in trainees
    ]
