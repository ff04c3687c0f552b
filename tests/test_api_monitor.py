"""Tests for monitoring and analysis API endpoints."""

import threading
import time

from fastapi.testclient import TestClient

from traineeboard.store.snapshot import DataStore


def create_test_client(store: DataStore) -> TestClient:
    """Create app backed by the given store."""
    from traineeboard.api.app import create_app

    return TestClient(create_app(store))


class TestAppFactory:
    """Test create_app() and the shared store dependency."""

    def test_serves_given_store(self, store):
        client = create_test_client(store)

        store.add_trainee("Dan Brown", "dan@example.com")

        assert [t["id"] for t in client.get("/api/trainees").json()] == [1, 2, 3, 4]

    def test_shared_store_created_once_under_concurrency(self, monkeypatch):
        from traineeboard.api import app as app_module

        created: list[DataStore] = []

        def slow_create_store():
            time.sleep(0.05)
            created.append(DataStore())
            return created[-1]

        monkeypatch.setattr(app_module, "_store", None)
        monkeypatch.setattr(app_module, "create_store", slow_create_store)

        stores: list[DataStore] = []
        threads = [
            threading.Thread(target=lambda: stores.append(app_module.get_store()))
            for _ in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert len(created) == 1
        assert all(s is created[0] for s in stores)


class TestHealth:
    """Test GET /health."""

    def test_ok(self, store):
        client = create_test_client(store)
        assert client.get("/health").json() == {"status": "ok"}


class TestMonitorEndpoint:
    """Test GET /api/monitor."""

    def test_row_per_trainee(self, store):
        client = create_test_client(store)

        rows = client.get("/api/monitor").json()

        assert [r["id"] for r in rows] == [1, 2, 3]
        assert rows[0]["status"] == "Passed"
        assert rows[0]["last_test_date"] == "2024-04-01"
        assert rows[2]["last_test_date"] is None
        assert rows[2]["trend"] == "insufficient-data"

    def test_filters(self, store):
        client = create_test_client(store)

        failed = client.get("/api/monitor", params={"show_passed": False}).json()
        assert [r["id"] for r in failed] == [2, 3]

        selected = client.get("/api/monitor", params=[("ids", 1), ("ids", 3)]).json()
        assert [r["id"] for r in selected] == [1, 3]

        named = client.get("/api/monitor", params={"name": "carol"}).json()
        assert [r["id"] for r in named] == [3]

    def test_reflects_mutations(self, store):
        client = create_test_client(store)

        store.add_test_result(3, "English", 90)
        carol = client.get("/api/monitor").json()[2]

        assert carol["total_tests"] == 1
        assert carol["status"] == "Passed"


class TestStatusEndpoint:
    """Test GET /api/status."""

    def test_status_shape(self, store):
        client = create_test_client(store)

        statuses = client.get("/api/status").json()

        assert [s["trainee"]["id"] for s in statuses] == [1, 2, 3]
        assert statuses[0]["is_passed"] is True
        assert statuses[1]["trend"] == "insufficient-data"
        assert statuses[2]["highest_grade"] is None


class TestAnalysisEndpoints:
    """Test subjects, analysis and statistics endpoints."""

    def test_subjects(self, store):
        client = create_test_client(store)
        assert client.get("/api/subjects").json() == [
            "Mathematics",
            "Physics",
            "English",
            "Chemistry",
        ]

    def test_analysis_selection(self, store):
        client = create_test_client(store)

        view = client.get(
            "/api/analysis", params=[("trainee_ids", 1), ("subjects", "Physics")]
        ).json()

        assert [p["value"] for p in view["performance"]] == [70]
        assert view["stats"]["average"] == 70
        assert [s["value"] for s in view["distribution"]] == [0, 1, 0]

    def test_statistics(self, store):
        client = create_test_client(store)

        stats = client.get("/api/statistics").json()

        assert stats["total_trainees"] == 3
        assert stats["total_tests"] == 6
        assert stats["pass_rate"] == 67
