# tests/test_main.py

"""
Tests for the application-level endpoints.
"""

from fastapi.testclient import TestClient


def test_health_check_needs_no_auth(client: TestClient):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
