"""Test results API endpoints.

GET /api/test-results - Filtered, paginated test results
GET /api/test-results/{result_id} - Get test result
POST /api/test-results - Record test result
PUT /api/test-results/{result_id} - Edit subject/grade/date
DELETE /api/test-results/{result_id} - Remove test result
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from traineeboard.api.app import get_store
from traineeboard.models.domain import TestResult
from traineeboard.models.types import (
    TestResultCreate,
    TestResultDetail,
    TestResultPage,
    TestResultUpdate,
)
from traineeboard.query.filters import DEFAULT_PAGE_SIZE, query
from traineeboard.store.snapshot import DataStore

router = APIRouter()


def result_detail(result: TestResult) -> TestResultDetail:
    """Convert a TestResult entity to its API model."""
    return TestResultDetail(
        id=result.id,
        trainee_id=result.trainee_id,
        trainee_name=result.trainee_name,
        subject=result.subject,
        grade=result.grade,
        test_date=result.test_date,
    )


@router.get("/test-results", response_model=TestResultPage)
def list_test_results(
    filter_expression: str = Query(default="", alias="filter"),
    page: int = Query(default=0, ge=0),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, gt=0),
    strict_range: bool = False,
    store: DataStore = Depends(get_store),
) -> TestResultPage:
    """Get one page of test results matching a filter expression.

    Args:
        filter_expression: Filter text ("id:3", "grade > 80", "math", ...).
        page: Zero-based page index.
        page_size: Results per page.
        strict_range: Make unparsable comparisons match nothing.
        store: Data store (injected).

    Returns:
        TestResultPage with the page's results and total match count.
    """
    result_page = query(
        store.get_test_results(),
        filter_expression,
        page,
        page_size,
        lenient_range=not strict_range,
    )
    return TestResultPage(
        data=[result_detail(r) for r in result_page.data],
        total=result_page.total,
    )


@router.get("/test-results/{result_id}", response_model=TestResultDetail)
def get_test_result(
    result_id: int,
    store: DataStore = Depends(get_store),
) -> TestResultDetail:
    """Get test result detail.

    Raises:
        HTTPException: 404 if test result not found.
    """
    result = store.get_test_result(result_id)

    if result is None:
        raise HTTPException(status_code=404, detail="Test result not found")

    return result_detail(result)


@router.post("/test-results", response_model=TestResultDetail, status_code=201)
def create_test_result(
    payload: TestResultCreate,
    store: DataStore = Depends(get_store),
) -> TestResultDetail:
    """Record a test result for an existing trainee.

    Raises:
        HTTPException: 404 if trainee not found.
    """
    if store.get_trainee(payload.trainee_id) is None:
        raise HTTPException(status_code=404, detail="Trainee not found")

    result = store.add_test_result(
        trainee_id=payload.trainee_id,
        subject=payload.subject,
        grade=payload.grade,
        test_date=payload.test_date,
        trainee_name=payload.trainee_name,
    )
    return result_detail(result)


@router.put("/test-results/{result_id}", response_model=TestResultDetail)
def update_test_result(
    result_id: int,
    payload: TestResultUpdate,
    store: DataStore = Depends(get_store),
) -> TestResultDetail:
    """Edit a test result's subject, grade or date.

    Raises:
        HTTPException: 404 if test result not found.
    """
    result = store.update_test_result(
        result_id,
        subject=payload.subject,
        grade=payload.grade,
        test_date=payload.test_date,
    )

    if result is None:
        raise HTTPException(status_code=404, detail="Test result not found")

    return result_detail(result)


@router.delete("/test-results/{result_id}", status_code=204)
def delete_test_result(
    result_id: int,
    store: DataStore = Depends(get_store),
) -> Response:
    """Remove a single test result.

    Raises:
        HTTPException: 404 if test result not found.
    """
    if not store.remove_test_result(result_id):
        raise HTTPException(status_code=404, detail="Test result not found")

    return Response(status_code=204)
