# Schemas package
from .book import BookBase, BookCreate, BookUpdate, BookResponse, MessageResponse
