from bookcatalog.models.book import Book

__all__ = ["Book"]
