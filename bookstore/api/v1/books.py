"""
API endpoints for the book catalog.

Fixed-path listings (search, featured, new, discounted) are registered before
``/books/{book_id}`` so they are not captured by the id route.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from bookstore.core.database import get_db
from bookstore.services.book_codec import BookDecodeError
from bookstore.services.book_service import BookService
from bookstore.schemas.book import (
    BookCreate,
    BookUpdate,
    BookResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Drivers raise OSError directly when the server cannot be reached
STORE_ERRORS = (SQLAlchemyError, OSError, BookDecodeError)


def _store_failure(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(e)}"
    )


def _book_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Book not found"
    )


# ========== Listings ==========

@router.get("/books", response_model=List[BookResponse])
async def get_all_books(
    category: Optional[str] = Query(None, description="Filter by category"),
    db: AsyncSession = Depends(get_db)
):
    """Get all books, optionally filtered by category."""
    try:
        return await BookService.get_all_books(db, category=category)
    except STORE_ERRORS as e:
        raise _store_failure("fetch books", e)


@router.get("/books/search", response_model=List[BookResponse])
async def search_books(
    q: Optional[str] = Query(None, description="Search keyword for title, author, or description"),
    db: AsyncSession = Depends(get_db)
):
    """Case-insensitive substring search over title, author and description."""
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="search query 'q' is required"
        )

    try:
        return await BookService.search_books(db, q.strip())
    except STORE_ERRORS as e:
        raise _store_failure("search books", e)


@router.get("/books/featured", response_model=List[BookResponse])
async def get_featured_books(db: AsyncSession = Depends(get_db)):
    """Top-rated books."""
    try:
        return await BookService.get_featured_books(db)
    except STORE_ERRORS as e:
        raise _store_failure("fetch featured books", e)


@router.get("/books/new", response_model=List[BookResponse])
async def get_new_books(db: AsyncSession = Depends(get_db)):
    """Books flagged as new or added recently."""
    try:
        return await BookService.get_new_books(db)
    except STORE_ERRORS as e:
        raise _store_failure("fetch new books", e)


@router.get("/books/discounted", response_model=List[BookResponse])
async def get_discounted_books(db: AsyncSession = Depends(get_db)):
    """Books currently on discount."""
    try:
        return await BookService.get_discounted_books(db)
    except STORE_ERRORS as e:
        raise _store_failure("fetch discounted books", e)


@router.get("/categories", response_model=List[str])
async def get_categories(db: AsyncSession = Depends(get_db)):
    """Distinct book categories in alphabetical order."""
    try:
        return await BookService.get_categories(db)
    except STORE_ERRORS as e:
        raise _store_failure("fetch categories", e)


# ========== Single Book ==========

@router.post("/books", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new book."""
    try:
        return await BookService.create_book(db, book_data)
    except STORE_ERRORS as e:
        raise _store_failure("create book", e)


@router.get("/books/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific book by ID."""
    try:
        book = await BookService.get_book_by_id(db, book_id)
    except STORE_ERRORS as e:
        raise _store_failure("fetch book", e)

    if not book:
        raise _book_not_found()
    return book


@router.put("/books/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: int,
    book_data: BookUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Replace every writable field of a book."""
    try:
        book = await BookService.update_book(db, book_id, book_data)
    except STORE_ERRORS as e:
        raise _store_failure("update book", e)

    if not book:
        raise _book_not_found()
    return book


@router.delete("/books/{book_id}", response_model=MessageResponse)
async def delete_book(
    book_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Permanently delete a book."""
    try:
        deleted = await BookService.delete_book(db, book_id)
    except STORE_ERRORS as e:
        raise _store_failure("delete book", e)

    if not deleted:
        raise _book_not_found()
    return {"message": "Book deleted successfully"}
