"""
Conversion between ``books`` rows and the Book schemas.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError

from bookstore.models.book import BOOK_WRITABLE_COLUMNS
from bookstore.schemas.book import BookBase, BookResponse

logger = logging.getLogger(__name__)


class BookDecodeError(ValueError):
    """A row does not fit the Book record shape."""


def _as_mapping(row: Any) -> Mapping[str, Any]:
    # SQLAlchemy Row objects expose their mapping view via ``_mapping``
    return getattr(row, "_mapping", row)


def decode_book(row: Any) -> BookResponse:
    """Decode a single row, raising ``BookDecodeError`` if it is malformed."""
    try:
        return BookResponse.model_validate(dict(_as_mapping(row)))
    except (ValidationError, TypeError, ValueError) as e:
        raise BookDecodeError(f"Cannot decode book row: {e}") from e


def decode_books(rows: Iterable[Any]) -> List[BookResponse]:
    """
    Decode a multi-row result.

    A row that fails to decode is logged and skipped so one malformed record
    does not blank out a whole listing. The number of skipped rows is logged
    once per batch.
    """
    books: List[BookResponse] = []
    skipped = 0
    for row in rows:
        try:
            books.append(decode_book(row))
        except BookDecodeError as e:
            skipped += 1
            mapping = _as_mapping(row)
            book_id = mapping.get("id") if isinstance(mapping, Mapping) else None
            logger.warning(f"Skipping book row id={book_id}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} undecodable book row(s) out of {skipped + len(books)}")
    return books


def encode_book(payload: Union[BookBase, Dict[str, Any]]) -> Dict[str, Any]:
    """Column values for an insert or full update. Absent optional fields stay ``None``."""
    data = payload.model_dump() if isinstance(payload, BookBase) else dict(payload)
    return {column.name: data.get(column.name) for column in BOOK_WRITABLE_COLUMNS}
