"""Grade badge derivation for presentation.

Bands mirror grade_distribution():
- excellent: grade >= 85 (green)
- good: 65 <= grade < 85 (orange)
- poor: grade < 65, or not a number (red)

The pass label applies the passing grade to a trainee's average.
"""

from __future__ import annotations

import math
from numbers import Real

from traineeboard.metrics.grades import EXCELLENT_THRESHOLD, GOOD_THRESHOLD, PASSING_GRADE
from traineeboard.models.domain import GradeClass, PassLabel

EXCELLENT_COLOR = "#4caf50"  # green
GOOD_COLOR = "#ff9800"  # orange
POOR_COLOR = "#f44336"  # red

_BAND_COLORS: dict[GradeClass, str] = {
    "excellent": EXCELLENT_COLOR,
    "good": GOOD_COLOR,
    "poor": POOR_COLOR,
}


def _is_grade(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def grade_to_css_class(grade: float) -> GradeClass:
    """Map a grade to its band name. Invalid grades fall into 'poor'."""
    if not _is_grade(grade):
        return "poor"
    if grade >= EXCELLENT_THRESHOLD:
        return "excellent"
    if grade >= GOOD_THRESHOLD:
        return "good"
    return "poor"


def grade_to_color(grade: float) -> str:
    """Map a grade to the chart color of its band."""
    return _BAND_COLORS[grade_to_css_class(grade)]


def pass_label(average_grade: float, passing_grade: float = PASSING_GRADE) -> PassLabel:
    """Return 'Passed' when the average reaches the passing grade."""
    if average_grade >= passing_grade:
        return "Passed"
    return "Failed"
