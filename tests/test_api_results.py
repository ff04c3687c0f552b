"""Tests for test results API endpoints."""

from fastapi.testclient import TestClient

from traineeboard.store.snapshot import DataStore


def create_test_client(store: DataStore) -> TestClient:
    """Create app backed by the given store."""
    from traineeboard.api.app import create_app

    return TestClient(create_app(store))


class TestListTestResults:
    """Test GET /api/test-results."""

    def test_default_page(self, store):
        client = create_test_client(store)

        response = client.get("/api/test-results")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 6
        assert [r["id"] for r in data["data"]] == [1, 2, 3, 4, 5, 6]
        assert data["data"][0] == {
            "id": 1,
            "trainee_id": 1,
            "trainee_name": "Alice Smith",
            "subject": "Mathematics",
            "grade": 60,
            "test_date": "2024-02-01",
        }

    def test_filter_and_paginate(self, store):
        client = create_test_client(store)

        response = client.get(
            "/api/test-results", params={"filter": "grade > 50", "page": 1, "page_size": 2}
        )
        data = response.json()

        # 60, 70, 95, 55, 88 match; page 1 holds the third and fourth
        assert data["total"] == 5
        assert [r["id"] for r in data["data"]] == [3, 5]

    def test_unparsable_comparison(self, store):
        client = create_test_client(store)

        lenient = client.get("/api/test-results", params={"filter": "grade > x"}).json()
        strict = client.get(
            "/api/test-results", params={"filter": "grade > x", "strict_range": True}
        ).json()

        assert lenient["total"] == 6
        assert strict == {"data": [], "total": 0}

    def test_invalid_page_size_rejected(self, store):
        client = create_test_client(store)
        response = client.get("/api/test-results", params={"page_size": 0})
        assert response.status_code == 422


class TestTestResultCrud:
    """Test single test result endpoints."""

    def test_get(self, store):
        client = create_test_client(store)
        assert client.get("/api/test-results/4").json()["trainee_name"] == "Bob Jones"
        assert client.get("/api/test-results/404").status_code == 404

    def test_create(self, store):
        client = create_test_client(store)

        response = client.post(
            "/api/test-results",
            json={"trainee_id": 3, "subject": "Physics", "grade": 91, "test_date": "2024-07-01"},
        )

        assert response.status_code == 201
        created = response.json()
        assert created["id"] == 7
        assert created["trainee_name"] == "Carol White"
        assert store.get_test_result(7) is not None

    def test_create_for_unknown_trainee(self, store):
        client = create_test_client(store)

        response = client.post(
            "/api/test-results",
            json={"trainee_id": 404, "subject": "Physics", "grade": 91},
        )
        assert response.status_code == 404

    def test_update(self, store):
        client = create_test_client(store)

        response = client.put("/api/test-results/1", json={"grade": 99})

        assert response.status_code == 200
        assert response.json()["grade"] == 99
        assert response.json()["subject"] == "Mathematics"

    def test_update_unknown(self, store):
        client = create_test_client(store)
        assert client.put("/api/test-results/404", json={"grade": 99}).status_code == 404

    def test_delete(self, store):
        client = create_test_client(store)

        assert client.delete("/api/test-results/1").status_code == 204
        assert client.delete("/api/test-results/1").status_code == 404
        assert client.get("/api/test-results").json()["total"] == 5
