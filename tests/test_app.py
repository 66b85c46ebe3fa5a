import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from bookstore.core.config import Settings
from bookstore.core.database import get_db
from bookstore.main import create_app
from bookstore.services.seed_service import SAMPLE_BOOKS


class BrokenSession:
    """Stands in for a session whose database has gone away."""

    async def execute(self, *args, **kwargs):
        raise SQLAlchemyError("connection refused")

    async def commit(self):
        pass

    async def rollback(self):
        pass


async def broken_db():
    yield BrokenSession()


@pytest.fixture
def broken_client(app):
    app.dependency_overrides[get_db] = broken_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def test_root(client):
    body = client.get("/").json()
    assert body["message"] == "Bookstore API"
    assert body["status"] == "running"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_health_reports_unavailable_store(broken_client):
    response = broken_client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert "connection refused" in response.json()["detail"]


@pytest.mark.parametrize("method,path", [
    ("get", "/api/v1/books"),
    ("get", "/api/v1/books/1"),
    ("get", "/api/v1/books/search?q=go"),
    ("get", "/api/v1/books/featured"),
    ("get", "/api/v1/books/new"),
    ("get", "/api/v1/books/discounted"),
    ("get", "/api/v1/categories"),
    ("delete", "/api/v1/books/1"),
])
def test_store_failures_surface_as_server_errors(broken_client, method, path):
    response = getattr(broken_client, method)(path)
    assert response.status_code == 500
    assert "connection refused" in response.json()["detail"]


def test_write_failures_surface_as_server_errors(broken_client, book_payload):
    created = broken_client.post("/api/v1/books", json=book_payload())
    assert created.status_code == 500
    assert created.json()["detail"] == "Failed to create book: connection refused"

    updated = broken_client.put("/api/v1/books/1", json=book_payload())
    assert updated.status_code == 500


def test_validation_runs_before_store(broken_client):
    response = broken_client.get("/api/v1/books/search")
    assert response.status_code == 400


def test_unreachable_database_fails_health(tmp_path):
    missing_dir = tmp_path / "missing" / "bookstore.db"
    settings = Settings(
        DATABASE_URL_OVERRIDE=f"sqlite+aiosqlite:///{missing_dir}",
        CREATE_TABLES=False,
    )
    with TestClient(create_app(settings)) as client:
        response = client.get("/health")
    assert response.status_code == 503


def test_seeding_is_off_by_default(client):
    assert client.get("/api/v1/books").json() == []


def test_seeding_replaces_existing_books(test_settings, book_payload):
    seeded_settings = test_settings.model_copy(update={"SEED_DATABASE": True})

    with TestClient(create_app(test_settings)) as client:
        client.post("/api/v1/books", json=book_payload(title="Will be wiped"))

    with TestClient(create_app(seeded_settings)) as client:
        titles = {book["title"] for book in client.get("/api/v1/books").json()}
        categories = client.get("/api/v1/categories").json()
        featured = client.get("/api/v1/books/featured").json()

    assert titles == {book.title for book in SAMPLE_BOOKS}
    assert categories == ["Database", "Programming", "Software Design"]
    assert [book["title"] for book in featured] == [
        "Designing Data-Intensive Applications",
        "The Go Programming Language",
        "Clean Architecture",
    ]


def test_unreachable_postgres_is_reported(tmp_path):
    settings = Settings(
        DATABASE_URL_OVERRIDE="postgresql+asyncpg://u:p@127.0.0.1:1/db",
        CREATE_TABLES=False,
    )
    with TestClient(create_app(settings), raise_server_exceptions=False) as client:
        health = client.get("/health")
        books = client.get("/api/v1/books")

    assert health.status_code == 503
    assert health.json()["status"] == "unhealthy"
    assert health.json()["detail"]

    assert books.status_code == 500
    assert books.json()["detail"].startswith("Failed to fetch books: ")
