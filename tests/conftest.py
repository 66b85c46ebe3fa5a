import pytest
from fastapi.testclient import TestClient

from bookstore.core.config import Settings
from bookstore.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "bookstore.db"


@pytest.fixture
def test_settings(db_path):
    return Settings(DATABASE_URL_OVERRIDE=f"sqlite+aiosqlite:///{db_path}")


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def book_payload():
    """Factory for valid create/update bodies."""
    def _make(**overrides):
        payload = {
            "title": "Test Driven Development",
            "author": "Kent Beck",
            "isbn": "978-0321146533",
            "year": 2002,
            "price": 1290.0,
            "category": "Programming",
            "discount": 0,
            "cover_image": "tdd.jpg",
            "rating": 4.2,
            "reviews_count": 12,
            "is_new": False,
            "language": "English",
            "publisher": "Addison-Wesley",
            "description": "By example.",
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def create_book(client, book_payload):
    def _create(**overrides):
        response = client.post("/api/v1/books", json=book_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _create
