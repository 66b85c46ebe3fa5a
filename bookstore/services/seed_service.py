"""
Development-only seeding of the books table.

Seeding wipes the table before inserting the sample catalog, so it only runs
when ``SEED_DATABASE`` is enabled.
"""

import logging
from sqlalchemy import delete, text
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.book import books_table
from bookstore.schemas.book import BookCreate
from bookstore.services import book_queries
from bookstore.services.book_codec import encode_book

logger = logging.getLogger(__name__)


SAMPLE_BOOKS = [
    BookCreate(
        title="The Go Programming Language",
        author="Alan A. A. Donovan",
        isbn="978-0134190440",
        year=2015,
        price=890.50,
        category="Programming",
        original_price=990.00,
        discount=10,
        cover_image="go.jpg",
        rating=4.8,
        reviews_count=150,
        is_new=False,
        pages=500,
        language="English",
        publisher="Addison-Wesley Professional",
        description="A comprehensive guide to the Go language.",
    ),
    BookCreate(
        title="Clean Architecture",
        author="Robert C. Martin",
        isbn="978-0134494166",
        year=2017,
        price=1250.00,
        category="Software Design",
        original_price=1600.00,
        discount=21,
        cover_image="clean.jpg",
        rating=4.5,
        reviews_count=90,
        is_new=True,
        pages=800,
        language="English",
        publisher="Prentice Hall",
        description="A blueprint for software structure.",
    ),
    BookCreate(
        title="Designing Data-Intensive Applications",
        author="Martin Kleppmann",
        isbn="978-1449373320",
        year=2017,
        price=1500.75,
        category="Database",
        original_price=1500.75,
        discount=0,
        cover_image="data.jpg",
        rating=4.9,
        reviews_count=200,
        is_new=False,
        pages=650,
        language="English",
        publisher="O'Reilly Media",
        description="The essential guide to the fundamentals of systems.",
    ),
]


async def clear_books(db: AsyncSession) -> None:
    """Remove every book. PostgreSQL also resets the id sequence."""
    if db.bind.dialect.name == "postgresql":
        await db.execute(text(f"TRUNCATE TABLE {books_table.name} RESTART IDENTITY CASCADE"))
    else:
        await db.execute(delete(books_table))


async def seed_books(db: AsyncSession) -> int:
    """Replace the table contents with ``SAMPLE_BOOKS``. Returns the number inserted."""
    await clear_books(db)
    logger.info("Table 'books' cleared")

    for book in SAMPLE_BOOKS:
        await db.execute(book_queries.insert_book(encode_book(book)))

    await db.commit()
    logger.info(f"Database seeded with {len(SAMPLE_BOOKS)} books")
    return len(SAMPLE_BOOKS)
