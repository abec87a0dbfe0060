"""Pytest configuration and fixtures for spiget_backend tests."""

from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spiget_backend.database import get_db, get_read_db
from spiget_backend.model import Base
from spiget_backend.server import app
from spiget_backend.settings import settings
from spiget_backend.spigot import SpigotClient, get_spigot_client


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external services")


# ============================================================================
# Upstream stub
# ============================================================================


class UpstreamStub:
    """
    Stand-in for the SpigotMC site and simple API, served via httpx.MockTransport.

    Simple API lookups answer from ``resources`` (bytes are sent verbatim);
    version downloads answer with ``download_status``/``download_headers``/``download_body``, after one
    redirect hop when ``redirect_downloads`` is set.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.resources: dict[int, dict | bytes] = {}
        self.error: Optional[Exception] = None
        self.redirect_downloads = False
        self.download_status = 200
        self.download_headers = {
            "Content-Type": "application/java-archive",
            "Content-Disposition": 'attachment; filename="plugin.jar"',
        }
        self.download_body = b"PK\x03\x04plugin-bytes"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        if request.url.params.get("action") == "getResource":
            data = self.resources.get(int(request.url.params["id"]))
            if data is None:
                return httpx.Response(200, content=b"null")
            if isinstance(data, bytes):
                return httpx.Response(200, content=data)
            return httpx.Response(200, json=data)

        if request.url.path.endswith("/download") and self.redirect_downloads:
            return httpx.Response(302, headers={"Location": "https://files.spigot.test/attachment/plugin.jar"})

        if request.url.path.endswith("/download") or request.url.host == "files.spigot.test":
            return httpx.Response(
                self.download_status,
                headers=self.download_headers,
                content=self.download_body,
            )

        return httpx.Response(404)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def engine():
    """In-memory SQLite shared by the test and the app threadpool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def spigot_client(upstream) -> SpigotClient:
    return SpigotClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def master_mode(monkeypatch):
    monkeypatch.setattr(settings, "SERVER_MODE", "master")


@pytest.fixture
def mirror_mode(monkeypatch):
    monkeypatch.setattr(settings, "SERVER_MODE", "mirror")


@pytest.fixture
def test_client(db, spigot_client, master_mode):
    def override_db():
        yield db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_read_db] = override_db
    app.dependency_overrides[get_spigot_client] = lambda: spigot_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def touched() -> list[str]:
    """Store and upstream dependencies resolved by the mirror_client."""
    return []


@pytest.fixture
def mirror_client(db, spigot_client, mirror_mode, touched):
    """Client for a non-master node that records every store or upstream access."""
    def tracking_db():
        touched.append("db")
        yield db

    def tracking_spigot():
        touched.append("upstream")
        return spigot_client

    app.dependency_overrides[get_db] = tracking_db
    app.dependency_overrides[get_read_db] = tracking_db
    app.dependency_overrides[get_spigot_client] = tracking_spigot

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
