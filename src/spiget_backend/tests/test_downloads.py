"""Tests for download resolution and the master-only proxy."""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spiget_backend.business_logic.downloads import FileSource, resolve_file_location
from spiget_backend.exceptions import InvalidStateException
from spiget_backend.settings import settings
from spiget_backend.tests.factories import make_resource, make_version


@pytest.fixture
def catalog(db: Session):
    db.add_all([
        make_resource(1, file_type=".jar"),
        make_resource(2, external=True, file_type=".external", file_external_url="https://example.org/plugin.zip"),
        make_resource(3, external=True, file_type=".external"),
        make_version(5, 1, release_date=100),
        make_version(6, 1, release_date=300),
    ])
    db.commit()


@pytest.mark.unit
class TestResolveFileLocation:

    def test_internal_file_is_on_the_cdn(self):
        source, location = resolve_file_location(make_resource(1, file_type=".jar"), settings)

        assert source is FileSource.CDN
        assert location == f"{settings.CDN_URL}/1.jar"

    def test_external_file(self):
        resource = make_resource(2, external=True, file_external_url="https://example.org/plugin.zip")

        assert resolve_file_location(resource, settings) == (FileSource.EXTERNAL, "https://example.org/plugin.zip")

    def test_external_without_url(self):
        with pytest.raises(InvalidStateException):
            resolve_file_location(make_resource(3, external=True), settings)


@pytest.mark.unit
class TestResourceDownload:

    def test_cdn_redirect(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/1/download", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == f"{settings.CDN_URL}/1.jar"
        assert response.headers["X-Spiget-File-Source"] == "cdn"

    def test_external_redirect(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/2/download", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.org/plugin.zip"
        assert response.headers["X-Spiget-File-Source"] == "external"

    def test_external_without_url(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/3/download", follow_redirects=False)

        assert response.status_code == 400
        assert response.json()["error"] == "cannot download external resource"
        assert response.json()["error_code"] == "VAL_003"

    def test_missing_resource(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/9/download", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "resource not found"


@pytest.mark.unit
class TestVersionDownload:

    def test_redirect_to_upstream(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/1/versions/latest/download", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == f"{settings.SPIGOT_URL}/resources/1/download?version=6"

    def test_missing_version(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/1/versions/99/download", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "version not found"


@pytest.mark.unit
class TestVersionProxy:

    def test_relays_upstream_file(self, catalog, upstream, test_client: TestClient):
        response = test_client.get("/resources/1/versions/5/download/proxy")

        assert response.status_code == 200
        assert response.content == upstream.download_body
        assert response.headers["content-type"] == "application/java-archive"
        assert response.headers["content-disposition"] == 'attachment; filename="plugin.jar"'
        assert response.headers["cache-control"] == "public, max-age=604800, immutable"

        request = upstream.requests[0]
        assert str(request.url) == f"{settings.SPIGOT_URL}/resources/1/download?version=5"
        assert request.headers["User-Agent"] == settings.USER_AGENT

    def test_follows_upstream_redirects(self, catalog, upstream, test_client: TestClient):
        upstream.redirect_downloads = True

        response = test_client.get("/resources/1/versions/5/download/proxy")

        assert response.status_code == 200
        assert response.content == upstream.download_body
        assert len(upstream.requests) == 2

    def test_default_content_type(self, catalog, upstream, test_client: TestClient):
        upstream.download_headers = {}

        response = test_client.get("/resources/1/versions/5/download/proxy")

        assert response.headers["content-type"] == "application/octet-stream"
        assert "content-disposition" not in response.headers

    def test_relays_upstream_error_status(self, catalog, upstream, test_client: TestClient):
        upstream.download_status = 403
        upstream.download_body = b"Forbidden"

        response = test_client.get("/resources/1/versions/5/download/proxy")

        assert response.status_code == 403
        assert response.content == b"Forbidden"

    def test_transport_failure_is_bad_gateway(self, catalog, upstream, test_client: TestClient):
        upstream.error = httpx.ConnectTimeout("timed out")

        response = test_client.get("/resources/1/versions/5/download/proxy")

        assert response.status_code == 502
        assert response.json()["error_code"] == "EXT_001"

    def test_missing_version(self, catalog, upstream, test_client: TestClient):
        response = test_client.get("/resources/1/versions/99/download/proxy")

        assert response.status_code == 404
        assert upstream.requests == []


@pytest.mark.unit
class TestProxyOnMirror:

    def test_redirects_to_master_without_touching_store(self, mirror_client: TestClient, touched, upstream):
        response = mirror_client.get("/resources/1/versions/latest/download/proxy?x=1", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == (
            f"{settings.MASTER_URL.rstrip('/')}/resources/1/versions/latest/download/proxy?x=1"
        )
        assert touched == []
        assert upstream.requests == []

    def test_plain_reads_are_served_locally(self, db: Session, mirror_client: TestClient):
        db.add(make_resource(1))
        db.commit()

        response = mirror_client.get("/resources/1/download", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["X-Spiget-File-Source"] == "cdn"
