"""Tests for update request intake."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spiget_backend.model import UpdateRequest
from spiget_backend.settings import BackendSettings, settings


@pytest.mark.unit
class TestRequestUpdate:

    def test_accepted_with_facets_from_body(self, db: Session, test_client: TestClient):
        response = test_client.post("/resources/1234/requestUpdate", json={"versions": False})

        assert response.status_code == 200
        assert response.json() == {
            "msg": "Resource update requested",
            "resource": 1234,
            "versions": False,
            "updates": True,
            "reviews": True,
            "delete": True,
        }

        stored = db.query(UpdateRequest).filter(UpdateRequest.requested_id == 1234).one()
        assert stored.type == "resource"
        assert stored.versions is False
        assert stored.reviews is True
        assert stored.requested > 0

    def test_reviews_facet_is_independent(self, test_client: TestClient):
        response = test_client.post(
            "/resources/7/requestUpdate",
            json={"updates": False, "reviews": True},
        )

        assert response.json()["updates"] is False
        assert response.json()["reviews"] is True

    def test_empty_body_requests_everything(self, test_client: TestClient):
        response = test_client.post("/resources/55/requestUpdate")

        assert response.status_code == 200
        data = response.json()
        assert all(data[facet] for facet in ("versions", "updates", "reviews", "delete"))

    def test_duplicate(self, db: Session, test_client: TestClient):
        first = test_client.post("/resources/1234/requestUpdate", json={})
        second = test_client.post("/resources/1234/requestUpdate", json={"reviews": False})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["error"] == "Duplicate Update Request"
        assert second.json()["error_code"] == "VAL_004"
        assert db.query(UpdateRequest).count() == 1

    def test_non_positive_id(self, db: Session, test_client: TestClient):
        response = test_client.post("/resources/0/requestUpdate", json={})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"
        assert db.query(UpdateRequest).count() == 0

    def test_invalid_body(self, test_client: TestClient):
        response = test_client.post("/resources/1/requestUpdate", json={"versions": "sometimes"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_002"

    def test_malformed_json(self, db: Session, test_client: TestClient):
        response = test_client.post(
            "/resources/1/requestUpdate",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_002"
        assert db.query(UpdateRequest).count() == 0


@pytest.mark.unit
class TestRequestUpdateOnMirror:

    def test_redirects_to_master(self, db: Session, mirror_client: TestClient, touched):
        response = mirror_client.post(
            "/resources/1234/requestUpdate",
            json={"versions": False},
            follow_redirects=False,
        )

        assert response.status_code == 307
        assert response.headers["location"] == f"{settings.MASTER_URL.rstrip('/')}/resources/1234/requestUpdate"
        assert touched == []
        assert db.query(UpdateRequest).count() == 0

    @pytest.mark.parametrize("body", [b"{not json", b'{"versions": "sometimes"}'])
    def test_invalid_body_still_redirects(self, mirror_client: TestClient, touched, body):
        response = mirror_client.post(
            "/resources/1/requestUpdate",
            content=body,
            headers={"Content-Type": "application/json"},
            follow_redirects=False,
        )

        assert response.status_code == 307
        assert response.headers["location"] == f"{settings.MASTER_URL.rstrip('/')}/resources/1/requestUpdate"
        assert touched == []


@pytest.mark.unit
class TestServerMode:

    def test_defaults_to_mirror(self, monkeypatch):
        # Restore the shared instance after re-reading the environment
        for name in list(vars(settings)):
            monkeypatch.setattr(settings, name, getattr(settings, name))
        monkeypatch.delenv("SERVER_MODE", raising=False)

        assert BackendSettings().is_master is False

    def test_master_is_explicit(self, monkeypatch):
        for name in list(vars(settings)):
            monkeypatch.setattr(settings, name, getattr(settings, name))
        monkeypatch.setenv("SERVER_MODE", "Master")

        assert BackendSettings().is_master is True
