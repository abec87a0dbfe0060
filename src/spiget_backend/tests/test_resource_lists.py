"""Tests for the resource list routes."""

import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from spiget_backend.business_logic.resources import list_recently_updated_resources
from spiget_backend.database import get_db
from spiget_backend.server import app
from spiget_backend.tests.factories import make_resource


@pytest.fixture
def catalog(db: Session):
    db.add_all([
        make_resource(1, ("1.16", "1.17"), name="Alpha", likes=5, release_date=100, update_date=100),
        make_resource(2, ("1.16", "1.18"), name="Bravo", likes=9, release_date=100, update_date=200),
        make_resource(3, ("1.18",), name="Charlie", likes=1, premium=True, price=4.99, currency="EUR",
                      release_date=300, update_date=300),
        make_resource(4, (), name="Delta", likes=7, release_date=50, update_date=9_000),
    ])
    db.commit()


@pytest.mark.unit
class TestResourceLists:

    def test_list_all(self, catalog, test_client: TestClient):
        response = test_client.get("/resources")

        assert response.status_code == 200
        data = response.json()
        assert [r["id"] for r in data] == [1, 2, 3, 4]
        assert response.headers["X-Total-Count"] == "4"
        assert response.headers["X-Page-Count"] == "1"

    def test_wire_names_are_camel_case(self, catalog, test_client: TestClient):
        data = test_client.get("/resources", params={"size": 1}).json()

        resource = data[0]
        assert resource["testedVersions"] == ["1.16", "1.17"]
        assert resource["releaseDate"] == 100
        assert resource["file"]["sizeUnit"] == "KB"
        assert "description" not in resource

    def test_pagination(self, catalog, test_client: TestClient):
        response = test_client.get("/resources", params={"size": 3, "page": 2})

        assert [r["id"] for r in response.json()] == [4]
        assert response.headers["X-Page-Index"] == "2"
        assert response.headers["X-Page-Count"] == "2"

    def test_page_past_the_end_is_empty(self, catalog, test_client: TestClient):
        response = test_client.get("/resources", params={"size": 3, "page": 9})

        assert response.status_code == 200
        assert response.json() == []

    def test_sort_descending(self, catalog, test_client: TestClient):
        response = test_client.get("/resources", params={"sort": "-likes"})

        assert [r["id"] for r in response.json()] == [2, 4, 1, 3]
        assert response.headers["X-Page-Sort"] == "likes"
        assert response.headers["X-Page-Order"] == "desc"

    def test_unknown_sort_falls_back_to_id(self, catalog, test_client: TestClient):
        response = test_client.get("/resources", params={"sort": "-secret"})

        assert [r["id"] for r in response.json()] == [1, 2, 3, 4]

    def test_field_projection(self, catalog, test_client: TestClient):
        data = test_client.get("/resources", params={"fields": "name,iconData,likes"}).json()

        assert data[0] == {"id": 1, "name": "Alpha", "likes": 5}

    def test_new(self, catalog, test_client: TestClient):
        data = test_client.get("/resources/new").json()

        assert [r["id"] for r in data] == [1, 3]

    def test_premium_and_free(self, catalog, test_client: TestClient):
        premium = test_client.get("/resources/premium").json()
        free = test_client.get("/resources/free").json()

        assert [r["id"] for r in premium] == [3]
        assert premium[0]["price"] == 4.99
        assert [r["id"] for r in free] == [1, 2, 4]


@pytest.mark.unit
class TestRecentUpdates:

    @pytest.mark.asyncio
    async def test_window_is_strict(self, db: Session):
        now = 10_000
        db.add_all([
            make_resource(1, update_date=now - 7199),
            make_resource(2, update_date=now - 7200),
            make_resource(3, update_date=now - 9000),
        ])
        db.commit()

        items, page, _ = await list_recently_updated_resources(db, {}, now=now)

        assert [r["id"] for r in items] == [1]
        assert page.total == 1

    def test_route_uses_current_time(self, db: Session, test_client: TestClient):
        now = int(time.time())
        db.add_all([
            make_resource(1, update_date=now - 60),
            make_resource(2, update_date=now - 86_400),
        ])
        db.commit()

        data = test_client.get("/resources/recentUpdates").json()
        assert [r["id"] for r in data] == [1]


@pytest.mark.unit
class TestTestedVersionMatch:

    def test_any(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/for/1.16,1.18", params={"method": "any"})

        assert response.status_code == 200
        body = response.json()
        assert body["check"] == ["1.16", "1.18"]
        assert body["method"] == "any"
        assert [r["id"] for r in body["match"]] == [1, 2, 3]

    def test_all(self, catalog, test_client: TestClient):
        body = test_client.get("/resources/for/1.16,1.18", params={"method": "all"}).json()

        assert [r["id"] for r in body["match"]] == [2]

    def test_method_defaults_to_any(self, catalog, test_client: TestClient):
        body = test_client.get("/resources/for/1.17").json()

        assert body["method"] == "any"
        assert [r["id"] for r in body["match"]] == [1]

    def test_match_only_reports_version_fields(self, catalog, test_client: TestClient):
        body = test_client.get("/resources/for/1.17").json()

        assert body["match"][0] == {"id": 1, "name": "Alpha", "testedVersions": ["1.16", "1.17"]}

    def test_unknown_method(self, catalog, test_client: TestClient):
        response = test_client.get("/resources/for/1.16", params={"method": "some"})

        assert response.status_code == 400
        assert response.json()["error"] == "Unknown method. Allowed: any, all"
        assert response.json()["error_code"] == "VAL_001"


@pytest.mark.unit
class TestStoreFailure:

    def test_query_error_is_a_500(self, test_client: TestClient):
        # No tables: every query fails
        broken = sessionmaker(bind=create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        ))()

        def broken_db():
            yield broken

        app.dependency_overrides[get_db] = broken_db
        response = test_client.get("/resources")

        assert response.status_code == 500
        assert response.json()["error_code"] == "DB_002"
        assert response.json()["error"] == "An error occurred while reading the catalog"
