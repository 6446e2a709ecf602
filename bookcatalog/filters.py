"""Filter resolution for the filtered book list.

A list request carries an optional :class:`BookFilter` and an optional bound.
:func:`resolve_filter` turns that pair into exactly one :data:`BookQuery`,
trying the sub-filters in a fixed order and stopping at the first one that
applies:

1. no filter at all: scan everything, capped by ``limit``
2. a non-empty ``ids`` list: look those identifiers up (malformed ones dropped)
3. ``author``: exact, case-sensitive author match
4. ``startDate`` and ``endDate`` together: inclusive ``year`` range
5. anything else: no match, empty result

Later sub-filters are ignored once an earlier one applies. ``limit`` only
bounds the unfiltered scan.
"""

import logging
import re
from dataclasses import dataclass

from sqlalchemy import ColumnElement

from bookcatalog.id import valid_ids
from bookcatalog.models import Book
from bookcatalog.repository import BookRepository
from bookcatalog.schemas.book import BookFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unfiltered:
    limit: int | None = None


@dataclass(frozen=True)
class ByIds:
    ids: tuple[str, ...]


@dataclass(frozen=True)
class ByAuthor:
    author: str


@dataclass(frozen=True)
class ByYearRange:
    start: int
    end: int


@dataclass(frozen=True)
class NoMatch:
    pass


BookQuery = Unfiltered | ByIds | ByAuthor | ByYearRange | NoMatch


_YEAR_RE = re.compile(r"[+-]?[0-9]+")

# Range of SQLite's INTEGER storage class.
_MIN_BOUND = -(2**63)
_MAX_BOUND = 2**63 - 1


def parse_year(value: str | None) -> int | None:
    """Parse a year bound; ``None`` when it is missing, not a plain base-10
    integer, or too large to compare against stored years."""
    if value is None:
        return None
    value = value.strip()
    if not _YEAR_RE.fullmatch(value):
        return None
    year = int(value)
    if not _MIN_BOUND <= year <= _MAX_BOUND:
        return None
    return year


def resolve_filter(book_filter: BookFilter | None, limit: int | None = None) -> BookQuery:
    if book_filter is None:
        return Unfiltered(limit)
    if book_filter.ids:
        return ByIds(tuple(valid_ids(book_filter.ids)))
    if book_filter.author is not None:
        return ByAuthor(book_filter.author)
    start = parse_year(book_filter.start_date)
    end = parse_year(book_filter.end_date)
    if start is not None and end is not None:
        return ByYearRange(start, end)
    return NoMatch()


def query_criteria(query: BookQuery) -> list[ColumnElement[bool]] | None:
    """Storage criteria for a resolved query.

    ``None`` means the answer is empty and storage need not be asked.
    """
    match query:
        case Unfiltered():
            return []
        case ByIds(ids=()):
            return None
        case ByIds(ids=ids):
            return [Book.id.in_(ids)]
        case ByAuthor(author=author):
            return [Book.author == author]
        case ByYearRange(start=start, end=end):
            return [Book.year >= start, Book.year <= end]
        case NoMatch():
            return None
    raise TypeError(f"Unsupported book query: {query!r}")


async def find_books(
    repository: BookRepository,
    book_filter: BookFilter | None,
    limit: int | None = None,
) -> list[Book]:
    query = resolve_filter(book_filter, limit)
    criteria = query_criteria(query)
    logger.debug("Resolved book filter %r to %r", book_filter, query)
    if criteria is None:
        return []
    bound = query.limit if isinstance(query, Unfiltered) else None
    return await repository.find(*criteria, limit=bound)
