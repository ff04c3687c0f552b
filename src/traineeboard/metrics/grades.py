"""Grade statistics over collections of test results.

Every function here is pure: input is read once into a list and never
mutated, and empty (or None) input yields zero/neutral values instead of
raising.

Rounding follows round-half-up (2.5 -> 3, -2.5 -> -2), which is what the
dashboard has always displayed. Python's round() would round half to even
and shift some averages by one point.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Protocol

import numpy as np

from traineeboard.models.domain import Trend
from traineeboard.models.types import GradeDistribution, GradeRange, PassFailStats

# Grade bands
EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 65

# Pass mark for individual tests and for a trainee's average
PASSING_GRADE = 60

# Half-over-half change (in grade points) needed to call a trend
TREND_DELTA = 5

# Fewest results needed before a trend is reported
MIN_TREND_SAMPLES = 2


class GradedRecord(Protocol):
    """Anything with a grade and a test date."""

    grade: float
    test_date: date


@dataclass(frozen=True)
class GradeThresholds:
    """Lower bounds of the excellent and good grade bands."""

    excellent: float = EXCELLENT_THRESHOLD
    good: float = GOOD_THRESHOLD


DEFAULT_THRESHOLDS = GradeThresholds()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def _as_list(records: Iterable[GradedRecord] | None) -> list[GradedRecord]:
    if records is None:
        return []
    return list(records)


def _grades(records: list[GradedRecord]) -> np.ndarray:
    return np.asarray([r.grade for r in records], dtype=float)


def _percent(count: int, total: int) -> int:
    return round_half_up(count / total * 100)


def average(records: Iterable[GradedRecord] | None) -> int:
    """Arithmetic mean of grades, rounded. 0 for no records."""
    items = _as_list(records)
    if not items:
        return 0
    return round_half_up(float(_grades(items).sum()) / len(items))


def median(records: Iterable[GradedRecord] | None) -> float:
    """Median grade.

    For an odd count the middle grade is returned as-is; for an even count
    the mean of the two central grades is rounded.
    """
    items = _as_list(records)
    if not items:
        return 0

    ordered = sorted(r.grade for r in items)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return round_half_up((ordered[middle - 1] + ordered[middle]) / 2)
    return ordered[middle]


def standard_deviation(records: Iterable[GradedRecord] | None) -> int:
    """Population standard deviation, rounded.

    Deviations are measured from the rounded average(), not the exact mean.
    Existing reports depend on these values, so keep it that way.
    """
    items = _as_list(records)
    if not items:
        return 0

    mean = average(items)
    squared = (_grades(items) - mean) ** 2
    return round_half_up(float(np.sqrt(squared.mean())))


def grade_distribution(
    records: Iterable[GradedRecord] | None,
    thresholds: GradeThresholds = DEFAULT_THRESHOLDS,
) -> GradeDistribution:
    """Count grades per band.

    excellent: grade >= thresholds.excellent
    good:      thresholds.good <= grade < thresholds.excellent
    poor:      grade < thresholds.good

    Args:
        records: Graded records.
        thresholds: Band lower bounds.

    Returns:
        GradeDistribution with counts and rounded percentages, all zero
        for no records.
    """
    items = _as_list(records)
    if not items:
        return GradeDistribution(
            excellent=0,
            good=0,
            poor=0,
            excellent_percent=0,
            good_percent=0,
            poor_percent=0,
        )

    grades = _grades(items)
    excellent = int(np.count_nonzero(grades >= thresholds.excellent))
    good = int(np.count_nonzero((grades >= thresholds.good) & (grades < thresholds.excellent)))
    poor = int(np.count_nonzero(grades < thresholds.good))
    total = len(items)

    return GradeDistribution(
        excellent=excellent,
        good=good,
        poor=poor,
        excellent_percent=_percent(excellent, total),
        good_percent=_percent(good, total),
        poor_percent=_percent(poor, total),
    )


def pass_fail_stats(
    records: Iterable[GradedRecord] | None,
    passing_grade: float = PASSING_GRADE,
) -> PassFailStats:
    """Count passed (grade >= passing_grade) and failed tests."""
    items = _as_list(records)
    if not items:
        return PassFailStats(passed=0, failed=0, pass_rate=0, fail_rate=0)

    passed = int(np.count_nonzero(_grades(items) >= passing_grade))
    failed = len(items) - passed
    total = len(items)

    return PassFailStats(
        passed=passed,
        failed=failed,
        pass_rate=_percent(passed, total),
        fail_rate=_percent(failed, total),
    )


def grade_range(records: Iterable[GradedRecord] | None) -> GradeRange:
    """Highest, lowest and their difference. All zero for no records."""
    items = _as_list(records)
    if not items:
        return GradeRange(highest=0, lowest=0, range=0)

    grades = [r.grade for r in items]
    highest = max(grades)
    lowest = min(grades)
    return GradeRange(highest=highest, lowest=lowest, range=highest - lowest)


def sort_by_date(records: Iterable[GradedRecord] | None) -> list[GradedRecord]:
    """Return a new list ordered by test_date, oldest first.

    The sort is stable, so results sharing a date keep their input order.
    """
    return sorted(_as_list(records), key=lambda r: r.test_date)


def improvement_trend(
    records: Iterable[GradedRecord] | None,
    min_samples: int = MIN_TREND_SAMPLES,
) -> Trend:
    """Classify whether grades are rising, falling or flat over time.

    Results are ordered by date and split at ceil(n/2), so the earlier
    half takes the extra result when n is odd. The rounded average of the
    later half is compared with that of the earlier half.

    Args:
        records: Graded records, in any order.
        min_samples: Fewest results needed for a classification. Values
            below 2 are treated as 2, since one result has no second half.

    Returns:
        'improving' if the later half is more than TREND_DELTA points
        higher, 'declining' if more than TREND_DELTA lower, 'stable'
        otherwise, or 'insufficient-data' below min_samples.
    """
    items = _as_list(records)
    if len(items) < max(min_samples, MIN_TREND_SAMPLES):
        return "insufficient-data"

    ordered = sort_by_date(items)
    split = math.ceil(len(ordered) / 2)
    difference = average(ordered[split:]) - average(ordered[:split])

    if difference > TREND_DELTA:
        return "improving"
    if difference < -TREND_DELTA:
        return "declining"
    return "stable"
