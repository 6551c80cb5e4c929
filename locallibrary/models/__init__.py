from locallibrary.models.author import Author
from locallibrary.models.book import Book
from locallibrary.models.genre import Genre

__all__ = ["Author", "Book", "Genre"]
