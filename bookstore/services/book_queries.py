"""
Statement builders for the book endpoints.

Each function returns a SQLAlchemy Core statement whose column list comes
from ``BOOK_COLUMNS``, so every read path yields rows in the same shape and
the row codec never drifts from the table. Caller-supplied values are always
bound parameters.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sqlalchemy import bindparam, delete, func, insert, or_, select, true, update
from sqlalchemy.sql import Delete, Insert, Select, Update

from bookstore.models.book import BOOK_COLUMNS, BOOK_WRITABLE_COLUMNS, books_table

FEATURED_MIN_RATING = 4.5
FEATURED_LIMIT = 10
NEW_WINDOW_DAYS = 30
NEW_LIMIT = 10
DISCOUNTED_LIMIT = 20

c = books_table.c


def _select_books() -> Select:
    return select(*BOOK_COLUMNS)


def _writable_values(values: Dict[str, Any]) -> Dict[str, Any]:
    missing = [column.name for column in BOOK_WRITABLE_COLUMNS if column.name not in values]
    if missing:
        raise ValueError(f"Missing values for columns: {', '.join(missing)}")
    return {column.name: values[column.name] for column in BOOK_WRITABLE_COLUMNS}


def list_books(category: Optional[str] = None) -> Select:
    stmt = _select_books()
    if category:
        stmt = stmt.where(c.category == category)
    return stmt


def get_book(book_id: int) -> Select:
    return _select_books().where(c.id == book_id)


def search_books(term: str) -> Select:
    """Case-insensitive substring match over title, author and description."""
    pattern = bindparam("pattern", f"%{term.lower()}%")
    return _select_books().where(
        or_(
            func.lower(c.title).like(pattern),
            func.lower(c.author).like(pattern),
            func.lower(c.description).like(pattern),
        )
    )


def featured_books() -> Select:
    return (
        _select_books()
        .where(c.rating >= FEATURED_MIN_RATING)
        .order_by(c.rating.desc(), c.reviews_count.desc())
        .limit(FEATURED_LIMIT)
    )


def new_books(now: Optional[datetime] = None) -> Select:
    """Books flagged as new or created within the last ``NEW_WINDOW_DAYS`` days."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=NEW_WINDOW_DAYS)
    return (
        _select_books()
        .where(or_(c.is_new.is_(true()), c.created_at >= since))
        .order_by(c.created_at.desc())
        .limit(NEW_LIMIT)
    )


def discounted_books() -> Select:
    return (
        _select_books()
        .where(c.discount > 0)
        .order_by(c.discount.desc(), c.title.asc())
        .limit(DISCOUNTED_LIMIT)
    )


def list_categories() -> Select:
    return select(c.category).distinct().order_by(c.category)


def insert_book(values: Dict[str, Any]) -> Insert:
    return insert(books_table).values(**_writable_values(values)).returning(*BOOK_COLUMNS)


def update_book(book_id: int, values: Dict[str, Any]) -> Update:
    """Replace every writable column; zero returned rows means the id does not exist."""
    return (
        update(books_table)
        .where(c.id == book_id)
        .values(**_writable_values(values), updated_at=func.now())
        .returning(*BOOK_COLUMNS)
    )


def delete_book(book_id: int) -> Delete:
    return delete(books_table).where(c.id == book_id)
