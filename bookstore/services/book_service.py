"""
Service for reading and writing catalog books.
"""

import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.schemas.book import BookCreate, BookUpdate, BookResponse
from bookstore.services import book_queries
from bookstore.services.book_codec import BookDecodeError, decode_book, decode_books, encode_book

logger = logging.getLogger(__name__)


async def _decode_written_row(db: AsyncSession, row) -> BookResponse:
    """Decode a RETURNING row before commit so an undecodable write is not persisted."""
    try:
        return decode_book(row)
    except BookDecodeError:
        await db.rollback()
        raise


class BookService:
    """Service for managing catalog books."""

    @staticmethod
    async def get_all_books(
        db: AsyncSession,
        category: Optional[str] = None
    ) -> List[BookResponse]:
        """Get all books, optionally filtered by category."""
        result = await db.execute(book_queries.list_books(category))
        return decode_books(result)

    @staticmethod
    async def get_book_by_id(
        db: AsyncSession,
        book_id: int
    ) -> Optional[BookResponse]:
        """Get a book by its ID."""
        result = await db.execute(book_queries.get_book(book_id))
        row = result.first()
        if row is None:
            return None
        return decode_book(row)

    @staticmethod
    async def search_books(db: AsyncSession, term: str) -> List[BookResponse]:
        result = await db.execute(book_queries.search_books(term))
        return decode_books(result)

    @staticmethod
    async def get_featured_books(db: AsyncSession) -> List[BookResponse]:
        result = await db.execute(book_queries.featured_books())
        return decode_books(result)

    @staticmethod
    async def get_new_books(db: AsyncSession) -> List[BookResponse]:
        result = await db.execute(book_queries.new_books())
        return decode_books(result)

    @staticmethod
    async def get_discounted_books(db: AsyncSession) -> List[BookResponse]:
        result = await db.execute(book_queries.discounted_books())
        return decode_books(result)

    @staticmethod
    async def get_categories(db: AsyncSession) -> List[str]:
        """Get the distinct categories in alphabetical order."""
        result = await db.execute(book_queries.list_categories())
        return list(result.scalars().all())

    @staticmethod
    async def create_book(
        db: AsyncSession,
        book_data: BookCreate
    ) -> BookResponse:
        """Create a new book. The store assigns id and timestamps."""
        result = await db.execute(book_queries.insert_book(encode_book(book_data)))
        book = await _decode_written_row(db, result.one())
        await db.commit()
        logger.info(f"Created book {book.id}: {book.title}")
        return book

    @staticmethod
    async def update_book(
        db: AsyncSession,
        book_id: int,
        book_data: BookUpdate
    ) -> Optional[BookResponse]:
        """Replace every writable field of a book. Returns None if it does not exist."""
        result = await db.execute(book_queries.update_book(book_id, encode_book(book_data)))
        row = result.first()
        if row is None:
            await db.rollback()
            return None

        book = await _decode_written_row(db, row)
        await db.commit()
        logger.info(f"Updated book {book.id}: {book.title}")
        return book

    @staticmethod
    async def delete_book(
        db: AsyncSession,
        book_id: int
    ) -> bool:
        """Hard delete a book. Returns False if it does not exist."""
        result = await db.execute(book_queries.delete_book(book_id))
        if result.rowcount == 0:
            await db.rollback()
            return False

        await db.commit()
        logger.info(f"Deleted book {book_id}")
        return True
