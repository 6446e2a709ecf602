"""Storage operations for book records.

The only code that reads or writes the ``books`` table. Malformed identifiers
are turned away here before any statement is built.
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookcatalog.database import get_session
from bookcatalog.id import normalize_id
from bookcatalog.models import Book

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("author", "title", "year")


class BookRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, book_id: str) -> Book | None:
        normalized = normalize_id(book_id)
        if normalized is None:
            return None
        return await self.session.get(Book, normalized)

    async def find(self, *criteria: ColumnElement[bool], limit: int | None = None) -> list[Book]:
        """Return books matching every criterion, in storage order.

        No criteria matches all records. ``limit`` caps the result size.
        """
        stmt = select(Book)
        if criteria:
            stmt = stmt.where(*criteria)
        stmt = stmt.order_by(Book.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save(self, **fields: Any) -> Book:
        book = Book(**{key: fields.get(key) for key in BOOK_FIELDS})
        self.session.add(book)
        await self.session.commit()
        await self.session.refresh(book)
        logger.info("Created book %s", book.id)
        return book

    async def update_fields(self, book_id: str, fields: dict[str, Any]) -> bool:
        """Overwrite only the given fields. Returns False if no such book."""
        unknown = set(fields) - set(BOOK_FIELDS)
        if unknown:
            raise ValueError(f"Unknown book fields: {sorted(unknown)}")
        book = await self.find_by_id(book_id)
        if book is None:
            logger.info("Update skipped, book %s not found", book_id)
            return False
        for key, value in fields.items():
            setattr(book, key, value)
        await self.session.commit()
        logger.info("Updated book %s fields %s", book.id, sorted(fields))
        return True

    async def delete_by_id(self, book_id: str) -> bool:
        book = await self.find_by_id(book_id)
        if book is None:
            logger.info("Delete skipped, book %s not found", book_id)
            return False
        await self.session.delete(book)
        await self.session.commit()
        logger.info("Deleted book %s", book.id)
        return True


async def get_repository(session: AsyncSession = Depends(get_session)) -> BookRepository:
    return BookRepository(session)
