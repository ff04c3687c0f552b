"""Analysis charts and store-wide statistics.

Computes chart data from test results. Pure: no store access.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from traineeboard.metrics import grades
from traineeboard.metrics.status import EXCELLENT_COLOR, GOOD_COLOR, POOR_COLOR
from traineeboard.models.domain import TestResult, Trainee
from traineeboard.models.types import (
    AnalysisView,
    DashboardStatistics,
    DistributionSlice,
    PerformancePoint,
    SubjectSummary,
    SummaryStats,
)
from traineeboard.query.filters import select_results


def performance_points(results: Sequence[TestResult]) -> list[PerformancePoint]:
    """One point per test, in input order."""
    return [
        PerformancePoint(name=r.trainee_name, value=r.grade, test_date=r.test_date)
        for r in results
    ]


def distribution_slices(
    results: Sequence[TestResult],
    thresholds: grades.GradeThresholds = grades.DEFAULT_THRESHOLDS,
) -> list[DistributionSlice]:
    """Grade distribution as labelled, colored chart slices."""
    distribution = grades.grade_distribution(results, thresholds)
    excellent = thresholds.excellent
    good = thresholds.good
    return [
        DistributionSlice(
            name=f"Excellent ({excellent:g}+)",
            value=distribution.excellent,
            color=EXCELLENT_COLOR,
        ),
        DistributionSlice(
            name=f"Good ({good:g}-{excellent - 1:g})",
            value=distribution.good,
            color=GOOD_COLOR,
        ),
        DistributionSlice(
            name=f"Poor (<{good:g})",
            value=distribution.poor,
            color=POOR_COLOR,
        ),
    ]


def summary_stats(results: Sequence[TestResult]) -> SummaryStats:
    """Average, median, standard deviation and range of the results."""
    return SummaryStats(
        average=grades.average(results),
        median=grades.median(results),
        standard_deviation=grades.standard_deviation(results),
        range=grades.grade_range(results),
    )


def subject_breakdown(
    results: Sequence[TestResult],
    subjects: Iterable[str],
) -> list[SubjectSummary]:
    """Test count and average grade for each known subject.

    Subjects with no results are listed with zero count and average.
    Results for subjects not in the list are left out.
    """
    by_subject: dict[str, list[TestResult]] = {}
    for result in results:
        by_subject.setdefault(result.subject, []).append(result)

    return [
        SubjectSummary(
            name=subject,
            value=len(by_subject.get(subject, [])),
            average=grades.average(by_subject.get(subject, [])),
        )
        for subject in subjects
    ]


def build_analysis(
    test_results: Iterable[TestResult],
    subjects: Iterable[str],
    trainee_ids: Iterable[int | str] | None = None,
    selected_subjects: Iterable[str] | None = None,
) -> AnalysisView:
    """Build all analysis charts for a selection of results.

    Args:
        test_results: All test results.
        subjects: Known subjects, in display order.
        trainee_ids: Restrict to these trainees; empty means all.
        selected_subjects: Restrict to these subjects; empty means all.

    Returns:
        AnalysisView with performance points, distribution slices,
        summary statistics and per-subject breakdown.
    """
    selected = select_results(test_results, trainee_ids, selected_subjects)

    return AnalysisView(
        performance=performance_points(selected),
        distribution=distribution_slices(selected),
        stats=summary_stats(selected),
        subjects=subject_breakdown(selected, subjects),
    )


def compute_dashboard_statistics(
    trainees: Sequence[Trainee],
    test_results: Sequence[TestResult],
) -> DashboardStatistics:
    """Store-wide totals. All zero when there are no test results."""
    pass_fail = grades.pass_fail_stats(test_results, grades.PASSING_GRADE)

    return DashboardStatistics(
        total_trainees=len(trainees),
        total_tests=len(test_results),
        passed_tests=pass_fail.passed,
        failed_tests=pass_fail.failed,
        pass_rate=pass_fail.pass_rate,
        average_grade=grades.average(test_results),
        grade_distribution=grades.grade_distribution(test_results),
    )
