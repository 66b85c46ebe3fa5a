# Models package
from .book import Book, books_table, BOOK_COLUMNS, BOOK_WRITABLE_COLUMNS
