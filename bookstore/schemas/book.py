"""
Pydantic schemas for the Book record.

Business limits live on the request schemas only. ``BookResponse`` accepts
any row whose columns have the right types, so stored data is never hidden
because it falls outside the current input rules.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# Book Base Schema
class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    isbn: str = Field(..., min_length=1, max_length=32)
    year: int = Field(..., description="Publication year")
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount, if any")
    discount: int = Field(0, ge=0, le=100, description="Discount percentage")
    cover_image: str = Field(..., min_length=1, max_length=500)
    rating: float = Field(0, ge=0, le=5)
    reviews_count: int = Field(0, ge=0)
    is_new: bool = False
    pages: Optional[int] = Field(None, ge=0)
    language: str = Field(..., min_length=1, max_length=50)
    publisher: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = ""


class BookCreate(BookBase):
    """Schema for creating a new book."""
    pass


class BookUpdate(BookBase):
    """Schema for replacing a book. Every writable field is sent; there is no partial update."""
    pass


class BookResponse(BaseModel):
    """Schema for book response."""
    id: int
    title: str
    author: str
    isbn: str
    year: int
    price: float
    category: str
    original_price: Optional[float] = None
    discount: int
    cover_image: str
    rating: float
    reviews_count: int
    is_new: bool
    pages: Optional[int] = None
    language: str
    publisher: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
