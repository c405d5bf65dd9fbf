"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient

from formatconverter import __version__
from formatconverter.api.app import create_app
from formatconverter.conversion.dispatcher import ConversionDispatcher


@pytest.fixture
def client():
    """Create test client."""
    with TestClient(create_app(), raise_server_exceptions=False) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert "timestamp" in data


def test_readiness(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert len(data["conversions"]) == 12
    assert data["max_upload_size_mb"] == 1024


def test_not_ready_without_conversions():
    with TestClient(create_app(ConversionDispatcher([]))) as client:
        response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
