"""Analysis API endpoints.

GET /api/subjects - Known subjects
GET /api/analysis - Chart data for selected trainees/subjects
GET /api/statistics - Store-wide totals
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from traineeboard.aggregation.analysis import build_analysis, compute_dashboard_statistics
from traineeboard.api.app import get_store
from traineeboard.models.types import AnalysisView, DashboardStatistics
from traineeboard.store.snapshot import DataStore

router = APIRouter()


@router.get("/subjects", response_model=list[str])
def list_subjects(store: DataStore = Depends(get_store)) -> list[str]:
    """List the subjects known to the store."""
    return list(store.get_subjects())


@router.get("/analysis", response_model=AnalysisView)
def get_analysis(
    trainee_ids: list[int] = Query(default=[]),
    subjects: list[str] = Query(default=[]),
    store: DataStore = Depends(get_store),
) -> AnalysisView:
    """Get analysis chart data.

    Args:
        trainee_ids: Restrict to these trainees; empty means all.
        subjects: Restrict to these subjects; empty means all.
        store: Data store (injected).
    """
    snapshot = store.snapshot
    return build_analysis(
        snapshot.test_results,
        snapshot.subjects,
        trainee_ids=trainee_ids,
        selected_subjects=subjects,
    )


@router.get("/statistics", response_model=DashboardStatistics)
def get_statistics(store: DataStore = Depends(get_store)) -> DashboardStatistics:
    """Get store-wide totals."""
    snapshot = store.snapshot
    return compute_dashboard_statistics(snapshot.trainees, snapshot.test_results)
