#!/usr/bin/env python3
"""Smoke test for the bundled demo data.

Loads the seed file, builds every view and checks the invariants the
dashboard relies on.

Usage:
    python scripts/smoke_demo.py [path/to/seed.json]

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from traineeboard.aggregation.analysis import (  # noqa: E402
    build_analysis,
    compute_dashboard_statistics,
)
from traineeboard.aggregation.monitor import build_monitor_view, build_status_view  # noqa: E402
from traineeboard.query.filters import query  # noqa: E402
from traineeboard.store.loader import fallback_snapshot, load_snapshot  # noqa: E402
from traineeboard.store.snapshot import DataSnapshot  # noqa: E402


def check_seed_loaded(snapshot: DataSnapshot) -> bool:
    """Check that the seed file was used rather than the fallback data."""
    if snapshot == fallback_snapshot():
        print("FAIL: Seed data not loaded, fallback data in use")
        return False
    print(f"OK: Loaded {len(snapshot.trainees)} trainees, {len(snapshot.test_results)} results")
    return True


def check_references(snapshot: DataSnapshot) -> bool:
    """Check that every test result points at a known trainee with a matching name."""
    names = {t.id: t.name for t in snapshot.trainees}
    ok = True
    for result in snapshot.test_results:
        if result.trainee_id not in names:
            print(f"FAIL: Result {result.id} references unknown trainee {result.trainee_id}")
            ok = False
        elif names[result.trainee_id] != result.trainee_name:
            print(f"FAIL: Result {result.id} trainee name {result.trainee_name!r} is stale")
            ok = False
    if ok:
        print("OK: All results reference known trainees")
    return ok


def check_monitor_view(snapshot: DataSnapshot) -> bool:
    """Check monitor and status views have one row per trainee."""
    rows = build_monitor_view(snapshot.trainees, snapshot.test_results)
    statuses = build_status_view(snapshot.trainees, snapshot.test_results)
    expected = [t.id for t in snapshot.trainees]

    if [r.id for r in rows] != expected or [s.trainee.id for s in statuses] != expected:
        print("FAIL: Views do not have one row per trainee in order")
        return False

    print(f"OK: Monitor view has {len(rows)} rows")
    for row in rows:
        print(
            f"    {row.id:>3} {row.name:<20} avg={row.average:>3} "
            f"{row.status:<6} tests={row.total_tests} trend={row.trend}"
        )
    return True


def check_query(snapshot: DataSnapshot) -> bool:
    """Check that the unfiltered query returns every result."""
    page = query(snapshot.test_results, "", 0, max(len(snapshot.test_results), 1))
    if page.total != len(snapshot.test_results):
        print(f"FAIL: Query total {page.total} != {len(snapshot.test_results)}")
        return False
    print(f"OK: Query returns all {page.total} results")
    return True


def check_statistics(snapshot: DataSnapshot) -> bool:
    """Check dashboard statistics and distribution add up."""
    stats = compute_dashboard_statistics(snapshot.trainees, snapshot.test_results)
    dist = stats.grade_distribution
    if dist.excellent + dist.good + dist.poor != stats.total_tests:
        print("FAIL: Grade distribution does not cover every test")
        return False

    analysis = build_analysis(snapshot.test_results, snapshot.subjects)
    print(f"OK: Average grade {stats.average_grade}, pass rate {stats.pass_rate}%")
    print(f"    Median {analysis.stats.median}, std dev {analysis.stats.standard_deviation}")
    return True


def main() -> int:
    """Run all checks."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    snapshot = load_snapshot(path)

    checks = [
        check_seed_loaded(snapshot),
        check_references(snapshot),
        check_monitor_view(snapshot),
        check_query(snapshot),
        check_statistics(snapshot),
    ]

    print()
    if all(checks):
        print("All checks passed")
        return 0
    print(f"{checks.count(False)} check(s) failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
