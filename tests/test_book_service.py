import asyncio

import pytest

from bookstore.schemas.book import BookCreate
from bookstore.services.book_codec import BookDecodeError
from bookstore.services.book_service import BookService


class FakeResult:
    def __init__(self, row):
        self._row = row

    def one(self):
        return self._row

    def first(self):
        return self._row


class RecordingSession:
    """Returns a fixed row from every statement and records transaction calls."""

    def __init__(self, row):
        self.row = row
        self.calls = []

    async def execute(self, stmt):
        return FakeResult(self.row)

    async def commit(self):
        self.calls.append("commit")

    async def rollback(self):
        self.calls.append("rollback")


def new_book():
    return BookCreate(
        title="Refactoring", author="Martin Fowler", isbn="978-0134757599",
        year=2018, price=1400.0, category="Programming", cover_image="refactoring.jpg",
        language="English", publisher="Addison-Wesley",
    )


def test_create_rolls_back_when_returned_row_is_undecodable():
    db = RecordingSession({"id": 1})
    with pytest.raises(BookDecodeError):
        asyncio.run(BookService.create_book(db, new_book()))
    assert db.calls == ["rollback"]


def test_update_rolls_back_when_returned_row_is_undecodable():
    db = RecordingSession({"id": 1, "title": None})
    with pytest.raises(BookDecodeError):
        asyncio.run(BookService.update_book(db, 1, new_book()))
    assert db.calls == ["rollback"]
