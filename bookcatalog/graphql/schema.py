"""
GraphQL schema for the book catalog.

Mirrors the REST routes: three queries (``getBook``, ``getBooks``, ``books``)
and three mutations (``createBook``, ``updateBook``, ``deleteBook``).
"""

from typing import Annotated

import strawberry
from fastapi import Depends
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from bookcatalog import config
from bookcatalog.filters import find_books
from bookcatalog.models import Book as BookModel
from bookcatalog.repository import BOOK_FIELDS, BookRepository, get_repository
from bookcatalog.schemas.book import BookFilter as BookFilterSchema


class BookNotFound(Exception):
    def __init__(self, book_id: str | None) -> None:
        super().__init__("Book not found")
        self.book_id = book_id


@strawberry.type
class Book:
    """A catalog record. ``_id`` is the storage-assigned identifier."""

    id: str = strawberry.field(name="_id")
    author: str | None = None
    title: str | None = None
    year: int | None = None

    @classmethod
    def from_model(cls, book: BookModel) -> "Book":
        return cls(id=book.id, author=book.author, title=book.title, year=book.year)


@strawberry.input
class BookInput:
    """
    Fields for creating or updating a book.

    On update, omitted fields are left as they are and explicit nulls clear them.
    """

    author: str | None = strawberry.UNSET
    title: str | None = strawberry.UNSET
    year: int | None = strawberry.UNSET

    def to_fields(self) -> dict:
        return {
            key: getattr(self, key)
            for key in BOOK_FIELDS
            if getattr(self, key) is not strawberry.UNSET
        }


@strawberry.input
class BookFilter:
    ids: list[strawberry.ID] | None = None
    author: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    def to_schema(self) -> BookFilterSchema:
        return BookFilterSchema(
            ids=[str(i) for i in self.ids] if self.ids is not None else None,
            author=self.author,
            start_date=self.start_date,
            end_date=self.end_date,
        )


@strawberry.input
class BookFiltersInput:
    filter: BookFilter | None = None
    limit: int | None = None


def _repository(info: Info) -> BookRepository:
    return info.context["repository"]


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 0:
        raise ValueError("limit must be non-negative")


@strawberry.type
class Query:
    @strawberry.field
    async def get_book(
        self,
        info: Info,
        book_id: Annotated[strawberry.ID | None, strawberry.argument(name="ID")] = None,
    ) -> Book:
        book = await _repository(info).find_by_id(book_id) if book_id is not None else None
        if book is None:
            raise BookNotFound(book_id)
        return Book.from_model(book)

    @strawberry.field
    async def get_books(self, info: Info, limit: int | None = None) -> list[Book | None]:
        _check_limit(limit)
        books = await _repository(info).find(limit=limit)
        return [Book.from_model(b) for b in books]

    @strawberry.field
    async def books(
        self,
        info: Info,
        filters: Annotated[BookFiltersInput | None, strawberry.argument(name="input")] = None,
    ) -> list[Book | None]:
        book_filter = None
        limit = None
        if filters is not None:
            _check_limit(filters.limit)
            limit = filters.limit
            if filters.filter is not None:
                book_filter = filters.filter.to_schema()
        books = await find_books(_repository(info), book_filter, limit)
        return [Book.from_model(b) for b in books]


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_book(self, info: Info, book_input: BookInput | None = None) -> str:
        fields = book_input.to_fields() if book_input is not None else {}
        book = await _repository(info).save(**fields)
        return book.id

    @strawberry.mutation
    async def update_book(
        self,
        info: Info,
        book_id: Annotated[strawberry.ID, strawberry.argument(name="ID")],
        book_input: BookInput | None = None,
    ) -> str:
        fields = book_input.to_fields() if book_input is not None else {}
        await _repository(info).update_fields(book_id, fields)
        return book_id

    @strawberry.mutation
    async def delete_book(
        self,
        info: Info,
        book_id: Annotated[strawberry.ID, strawberry.argument(name="ID")],
    ) -> str:
        await _repository(info).delete_by_id(book_id)
        return book_id


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(repository: BookRepository = Depends(get_repository)) -> dict:
    return {"repository": repository}


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context, graphql_ide="graphiql" if config.GRAPHIQL else None)
