"""Filter expressions and pagination over test results.

Filter expression grammar (first matching rule wins, case-insensitive):
- ""            every record
- "id:<text>"   trainee id contains <text>
- contains > or <  grade comparison, e.g. "grade > 80", "<50"
- anything else trainee name, subject or grade contains the text

A comparison that cannot be parsed (e.g. "grade > abc") matches every
record. Pass lenient_range=False to make it match nothing instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from traineeboard.models.domain import TestResult, Trainee
from traineeboard.models.types import MonitorRow

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

ID_PREFIX = "id:"
_RANGE_PATTERN = re.compile(r"(?:grade?)?\s*([><])\s*(\d+)")


@dataclass
class QueryPage:
    """One page of filtered results and the size of the full match."""

    data: list[TestResult] = field(default_factory=list)
    total: int = 0


def grade_text(grade: float) -> str:
    """Render a grade the way it is displayed (90.0 -> '90')."""
    if isinstance(grade, float) and grade.is_integer():
        return str(int(grade))
    return str(grade)


def _filter_by_id(records: list[TestResult], text: str) -> list[TestResult]:
    needle = text[len(ID_PREFIX) :].strip()
    return [r for r in records if needle in str(r.trainee_id)]


def _filter_by_range(
    records: list[TestResult],
    text: str,
    lenient: bool,
) -> list[TestResult]:
    match = _RANGE_PATTERN.search(text)
    if match is None:
        logger.debug("Unparsable range filter %r (lenient=%s)", text, lenient)
        return list(records) if lenient else []

    operator, value = match.group(1), int(match.group(2))
    if operator == ">":
        return [r for r in records if r.grade > value]
    return [r for r in records if r.grade < value]


def _filter_by_text(records: list[TestResult], text: str) -> list[TestResult]:
    return [
        r
        for r in records
        if text in r.trainee_name.lower()
        or text in r.subject.lower()
        or text in grade_text(r.grade)
    ]


def apply_filter(
    records: Iterable[TestResult],
    filter_expression: str,
    *,
    lenient_range: bool = True,
) -> list[TestResult]:
    """Return the records matching a filter expression, in input order.

    Args:
        records: Test results to filter.
        filter_expression: Expression in the grammar described above.
        lenient_range: Whether an unparsable comparison matches everything.

    Returns:
        New list of matching records.
    """
    items = list(records)
    text = (filter_expression or "").strip().lower()

    if not text:
        return items
    if text.startswith(ID_PREFIX):
        return _filter_by_id(items, text)
    if ">" in text or "<" in text:
        return _filter_by_range(items, text, lenient_range)
    return _filter_by_text(items, text)


def paginate(items: Sequence[TestResult], page: int, page_size: int) -> list[TestResult]:
    """Slice out one zero-based page. Pages past the end are empty.

    Raises:
        ValueError: If page is negative or page_size is not positive.
    """
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")

    start = page * page_size
    return list(items[start : start + page_size])


def query(
    records: Iterable[TestResult],
    filter_expression: str = "",
    page: int = 0,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    lenient_range: bool = True,
) -> QueryPage:
    """Filter test results and return the requested page.

    Args:
        records: All test results.
        filter_expression: Filter expression; empty matches everything.
        page: Zero-based page index.
        page_size: Records per page.
        lenient_range: Whether an unparsable comparison matches everything.

    Returns:
        QueryPage with the page's records and the total match count.

    Raises:
        ValueError: If page is negative or page_size is not positive.
    """
    filtered = apply_filter(records, filter_expression, lenient_range=lenient_range)
    return QueryPage(data=paginate(filtered, page, page_size), total=len(filtered))


def select_results(
    records: Iterable[TestResult],
    trainee_ids: Iterable[int | str] | None = None,
    subjects: Iterable[str] | None = None,
) -> list[TestResult]:
    """Restrict results to chosen trainees and subjects.

    An empty or missing selection does not restrict. Trainee ids are
    compared as strings, so "3" and 3 select the same trainee.
    """
    selected = list(records)

    wanted_ids = {str(i) for i in trainee_ids or ()}
    if wanted_ids:
        selected = [r for r in selected if str(r.trainee_id) in wanted_ids]

    wanted_subjects = set(subjects or ())
    if wanted_subjects:
        selected = [r for r in selected if r.subject in wanted_subjects]

    return selected


def search_trainees(trainees: Iterable[Trainee], text: str) -> list[Trainee]:
    """Trainees whose name or email contains text (case-insensitive)."""
    needle = text.lower()
    return [t for t in trainees if needle in t.name.lower() or needle in t.email.lower()]


def filter_monitor_rows(
    rows: Iterable[MonitorRow],
    selected_ids: Iterable[int | str] | None = None,
    name_filter: str = "",
    show_passed: bool = True,
    show_failed: bool = True,
) -> list[MonitorRow]:
    """Apply the monitor table filters.

    Args:
        rows: Monitor rows.
        selected_ids: Trainee ids to keep; empty keeps all.
        name_filter: Case-insensitive substring of the trainee name.
        show_passed: Keep rows with status 'Passed'.
        show_failed: Keep rows with status 'Failed'.

    Returns:
        Matching rows in input order.
    """
    wanted_ids = {str(i) for i in selected_ids or ()}
    needle = name_filter.strip().lower()

    kept: list[MonitorRow] = []
    for row in rows:
        if wanted_ids and str(row.id) not in wanted_ids:
            continue
        if needle and needle not in row.name.lower():
            continue
        if not show_passed and row.status == "Passed":
            continue
        if not show_failed and row.status == "Failed":
            continue
        kept.append(row)
    return kept
