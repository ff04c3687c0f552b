"""Trainees API endpoints.

GET /api/trainees - List trainees (optional ?q= search on name/email)
GET /api/trainees/{trainee_id} - Get trainee
GET /api/trainees/{trainee_id}/test-results - Get a trainee's test results
POST /api/trainees - Enroll trainee
PUT /api/trainees/{trainee_id} - Update contact/address fields
DELETE /api/trainees/{trainee_id} - Remove trainee and their results
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from traineeboard.aggregation.monitor import trainee_detail
from traineeboard.api.app import get_store
from traineeboard.api.routes.results import result_detail
from traineeboard.models.types import (
    TestResultDetail,
    TraineeCreate,
    TraineeDetail,
    TraineeUpdate,
)
from traineeboard.store.snapshot import DataStore

router = APIRouter()


@router.get("/trainees", response_model=list[TraineeDetail])
def list_trainees(
    q: str = "",
    store: DataStore = Depends(get_store),
) -> list[TraineeDetail]:
    """List trainees, optionally narrowed by a name/email search.

    Args:
        q: Case-insensitive substring of name or email.
        store: Data store (injected).
    """
    trainees = store.search_trainees(q) if q.strip() else store.get_trainees()
    return [trainee_detail(t) for t in trainees]


@router.get("/trainees/{trainee_id}", response_model=TraineeDetail)
def get_trainee(
    trainee_id: int,
    store: DataStore = Depends(get_store),
) -> TraineeDetail:
    """Get trainee detail.

    Raises:
        HTTPException: 404 if trainee not found.
    """
    trainee = store.get_trainee(trainee_id)

    if trainee is None:
        raise HTTPException(status_code=404, detail="Trainee not found")

    return trainee_detail(trainee)


@router.get("/trainees/{trainee_id}/test-results", response_model=list[TestResultDetail])
def get_trainee_results(
    trainee_id: int,
    store: DataStore = Depends(get_store),
) -> list[TestResultDetail]:
    """Get all test results of one trainee, in recorded order.

    Raises:
        HTTPException: 404 if trainee not found.
    """
    if store.get_trainee(trainee_id) is None:
        raise HTTPException(status_code=404, detail="Trainee not found")

    return [result_detail(r) for r in store.get_test_results_for_trainee(trainee_id)]


@router.post("/trainees", response_model=TraineeDetail, status_code=201)
def create_trainee(
    payload: TraineeCreate,
    store: DataStore = Depends(get_store),
) -> TraineeDetail:
    """Enroll a new trainee."""
    trainee = store.add_trainee(**payload.model_dump())
    return trainee_detail(trainee)


@router.put("/trainees/{trainee_id}", response_model=TraineeDetail)
def update_trainee(
    trainee_id: int,
    payload: TraineeUpdate,
    store: DataStore = Depends(get_store),
) -> TraineeDetail:
    """Update a trainee's contact and address fields.

    Fields sent as null are cleared; name and email cannot be cleared.

    Raises:
        HTTPException: 422 if name or email is null, 404 if trainee not found.
    """
    try:
        trainee = store.update_trainee(trainee_id, **payload.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if trainee is None:
        raise HTTPException(status_code=404, detail="Trainee not found")

    return trainee_detail(trainee)


@router.delete("/trainees/{trainee_id}", status_code=204)
def delete_trainee(
    trainee_id: int,
    store: DataStore = Depends(get_store),
) -> Response:
    """Remove a trainee and all of their test results.

    Raises:
        HTTPException: 404 if trainee not found.
    """
    if not store.remove_trainee(trainee_id):
        raise HTTPException(status_code=404, detail="Trainee not found")

    return Response(status_code=204)
