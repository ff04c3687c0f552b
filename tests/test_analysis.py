"""Tests for analysis charts and dashboard statistics."""

from traineeboard.aggregation.analysis import (
    build_analysis,
    compute_dashboard_statistics,
    distribution_slices,
    subject_breakdown,
)
from traineeboard.metrics.status import EXCELLENT_COLOR, GOOD_COLOR, POOR_COLOR

SUBJECTS = ["Mathematics", "Physics", "English", "Chemistry"]


class TestBuildAnalysis:
    """Test build_analysis()."""

    def test_all_results_without_selection(self, test_results):
        view = build_analysis(test_results, SUBJECTS)

        assert len(view.performance) == len(test_results)
        assert view.performance[0].name == "Alice Smith"
        assert view.performance[0].value == 60

    def test_selection_by_trainee(self, test_results):
        view = build_analysis(test_results, SUBJECTS, trainee_ids=[2])

        assert [p.name for p in view.performance] == ["Bob Jones", "Bob Jones"]
        assert view.stats.average == 48
        assert view.stats.range.highest == 55

    def test_selection_by_subject(self, test_results):
        view = build_analysis(test_results, SUBJECTS, selected_subjects=["Physics"])

        # Alice's 70 and the dangling 88
        assert [p.value for p in view.performance] == [70, 88]
        physics = next(s for s in view.subjects if s.name == "Physics")
        assert physics.value == 2
        assert physics.average == 79

    def test_empty_selection_is_neutral(self, test_results):
        view = build_analysis(test_results, SUBJECTS, trainee_ids=[404])

        assert view.performance == []
        assert [s.value for s in view.distribution] == [0, 0, 0]
        assert view.stats.average == 0
        assert view.stats.median == 0
        assert all(s.value == 0 and s.average == 0 for s in view.subjects)


class TestDistributionSlices:
    """Test distribution chart slices."""

    def test_labels_counts_and_colors(self, test_results):
        slices = distribution_slices(test_results)

        # 95, 88 excellent; 70 good; 60, 40, 55 poor
        assert [s.name for s in slices] == ["Excellent (85+)", "Good (65-84)", "Poor (<65)"]
        assert [s.value for s in slices] == [2, 1, 3]
        assert [s.color for s in slices] == [EXCELLENT_COLOR, GOOD_COLOR, POOR_COLOR]


class TestSubjectBreakdown:
    """Test per-subject counts."""

    def test_follows_known_subject_order(self, test_results):
        breakdown = subject_breakdown(test_results, SUBJECTS)

        assert [s.name for s in breakdown] == SUBJECTS
        assert [s.value for s in breakdown] == [2, 2, 1, 1]
        assert breakdown[0].average == 50

    def test_unknown_subjects_left_out(self, test_results):
        breakdown = subject_breakdown(test_results, ["Biology"])
        assert [(s.name, s.value) for s in breakdown] == [("Biology", 0)]


class TestDashboardStatistics:
    """Test compute_dashboard_statistics()."""

    def test_totals(self, trainees, test_results):
        stats = compute_dashboard_statistics(trainees, test_results)

        assert stats.total_trainees == 3
        assert stats.total_tests == 6
        assert stats.passed_tests == 4
        assert stats.failed_tests == 2
        assert stats.pass_rate == 67
        # (60 + 70 + 95 + 40 + 55 + 88) / 6 = 68
        assert stats.average_grade == 68
        assert stats.grade_distribution.excellent == 2

    def test_empty_store_is_all_zero(self):
        stats = compute_dashboard_statistics([], [])

        assert stats.total_tests == 0
        assert stats.pass_rate == 0
        assert stats.average_grade == 0
        assert stats.grade_distribution.poor_percent == 0
