"""
Book model for the bookstore catalog.

The table definition is the single source of truth for the record's column
set. ``BOOK_COLUMNS`` and ``BOOK_WRITABLE_COLUMNS`` are derived from it, and
every statement in ``bookstore.services.book_queries`` is built from them.
"""

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Numeric, Text, false
from sqlalchemy.sql import func

from bookstore.core.database import Base


class Book(Base):
    """A single catalog entry."""
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(32), nullable=False)
    year = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    original_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    discount = Column(Integer, nullable=False, default=0, server_default="0")  # percent
    cover_image = Column(String(500), nullable=False)
    rating = Column(Numeric(3, 2, asdecimal=False), nullable=False, default=0, server_default="0")
    reviews_count = Column(Integer, nullable=False, default=0, server_default="0")
    is_new = Column(Boolean, nullable=False, default=False, server_default=false())
    pages = Column(Integer, nullable=True)
    language = Column(String(50), nullable=False)
    publisher = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="", server_default="")

    # Metadata
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Book(title='{self.title}', author='{self.author}')>"


books_table = Book.__table__

# Store-assigned columns are read but never written by clients
STORE_ASSIGNED_COLUMNS = ("id", "created_at", "updated_at")

BOOK_COLUMNS = tuple(books_table.c)
BOOK_WRITABLE_COLUMNS = tuple(
    column for column in BOOK_COLUMNS if column.name not in STORE_ASSIGNED_COLUMNS
)
