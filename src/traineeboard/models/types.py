"""Pydantic models for the traineeboard API.

Statistics results are returned by the metrics layer directly as these
models, so the API can serialize them without a second mapping step.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

Grade = int | float
TrendLabel = Literal["improving", "declining", "stable", "insufficient-data"]


# ============================================================================
# Statistics
# ============================================================================


class GradeDistribution(BaseModel):
    """Bucket counts and rounded percentages per grade band."""

    excellent: int
    good: int
    poor: int
    excellent_percent: int
    good_percent: int
    poor_percent: int


class PassFailStats(BaseModel):
    """Passed/failed counts against a passing grade."""

    passed: int
    failed: int
    pass_rate: int
    fail_rate: int


class GradeRange(BaseModel):
    """Highest and lowest grade and their spread."""

    highest: Grade
    lowest: Grade
    range: Grade


# ============================================================================
# Records
# ============================================================================


class TraineeDetail(BaseModel):
    """Trainee payload for API responses."""

    id: int
    name: str
    email: str
    registration_date: date
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None


class TraineeCreate(BaseModel):
    """New trainee submission."""

    name: str = Field(min_length=1)
    email: str
    registration_date: date | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None


class TraineeUpdate(BaseModel):
    """Partial trainee update.

    Unset fields are left unchanged; null clears an optional address field.
    """

    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip: str | None = None


class TestResultDetail(BaseModel):
    """Test result payload for API responses."""

    __test__ = False

    id: int
    trainee_id: int
    trainee_name: str
    subject: str
    grade: Grade
    test_date: date


class TestResultCreate(BaseModel):
    """New test result submission."""

    __test__ = False

    trainee_id: int
    subject: str = Field(min_length=1)
    grade: Grade
    test_date: date | None = None
    trainee_name: str | None = None


class TestResultUpdate(BaseModel):
    """Test result edit. id and trainee_id cannot change."""

    __test__ = False

    subject: str | None = Field(default=None, min_length=1)
    grade: Grade | None = None
    test_date: date | None = None


class TestResultPage(BaseModel):
    """One page of filtered test results."""

    __test__ = False

    data: list[TestResultDetail]
    total: int


# ============================================================================
# Monitoring
# ============================================================================


class MonitorRow(BaseModel):
    """Per-trainee summary row for the monitor table.

    last_test_date is None when the trainee has no tests.
    """

    id: int
    name: str
    average: int
    status: Literal["Passed", "Failed"]
    total_tests: int
    passed_tests: int
    last_test_date: date | None
    trend: TrendLabel
    highest_grade: Grade
    lowest_grade: Grade
    standard_deviation: int


class TraineeStatus(BaseModel):
    """Extended per-trainee status with the trainee record embedded."""

    trainee: TraineeDetail
    average_grade: int
    median_grade: Grade
    is_passed: bool
    test_count: int
    passed_tests: int
    pass_rate: int
    last_test_date: date | None
    trend: TrendLabel
    highest_grade: Grade | None
    lowest_grade: Grade | None
    standard_deviation: int
    distribution: GradeDistribution


# ============================================================================
# Analysis
# ============================================================================


class PerformancePoint(BaseModel):
    """One test plotted on the performance-over-time chart."""

    name: str
    value: Grade
    test_date: date


class DistributionSlice(BaseModel):
    """One band of the grade distribution chart."""

    name: str
    value: int
    color: str


class SummaryStats(BaseModel):
    """Summary statistics shown next to the distribution chart."""

    average: int
    median: Grade
    standard_deviation: int
    range: GradeRange


class SubjectSummary(BaseModel):
    """Test count and average for one subject."""

    name: str
    value: int
    average: int


class AnalysisView(BaseModel):
    """Chart data for the analysis page."""

    performance: list[PerformancePoint]
    distribution: list[DistributionSlice]
    stats: SummaryStats
    subjects: list[SubjectSummary]


class DashboardStatistics(BaseModel):
    """Store-wide totals."""

    total_trainees: int
    total_tests: int
    passed_tests: int
    failed_tests: int
    pass_rate: int
    average_grade: int
    grade_distribution: GradeDistribution
