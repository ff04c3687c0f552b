"""Monitoring API endpoints.

GET /api/monitor - Per-trainee monitor rows, with table filters
GET /api/status - Extended per-trainee status
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from traineeboard.aggregation.monitor import build_monitor_view, build_status_view
from traineeboard.api.app import get_store
from traineeboard.models.types import MonitorRow, TraineeStatus
from traineeboard.query.filters import filter_monitor_rows
from traineeboard.store.snapshot import DataStore

router = APIRouter()


@router.get("/monitor", response_model=list[MonitorRow])
def get_monitor(
    ids: list[int] = Query(default=[]),
    name: str = "",
    show_passed: bool = True,
    show_failed: bool = True,
    store: DataStore = Depends(get_store),
) -> list[MonitorRow]:
    """Get monitor rows for all trainees, then apply the table filters.

    Args:
        ids: Trainee ids to keep; empty keeps all.
        name: Case-insensitive substring of the trainee name.
        show_passed: Include trainees whose average passes.
        show_failed: Include trainees whose average fails.
        store: Data store (injected).
    """
    snapshot = store.snapshot
    rows = build_monitor_view(snapshot.trainees, snapshot.test_results)
    return filter_monitor_rows(
        rows,
        selected_ids=ids,
        name_filter=name,
        show_passed=show_passed,
        show_failed=show_failed,
    )


@router.get("/status", response_model=list[TraineeStatus])
def get_status(store: DataStore = Depends(get_store)) -> list[TraineeStatus]:
    """Get extended status for every trainee."""
    snapshot = store.snapshot
    return build_status_view(snapshot.trainees, snapshot.test_results)
