"""Tests for filter resolution: precedence, id clean-up, year ranges, and
execution against a real repository."""

import pytest

from bookcatalog.filters import (
    ByAuthor,
    ByIds,
    ByYearRange,
    NoMatch,
    Unfiltered,
    find_books,
    parse_year,
    query_criteria,
    resolve_filter,
)
from bookcatalog.schemas.book import BookFilter

GOOD = "5f8d0d55b54764421b7156c3"


# --- resolve_filter ---

def test_no_filter_is_unfiltered():
    assert resolve_filter(None) == Unfiltered(None)
    assert resolve_filter(None, 3) == Unfiltered(3)


def test_ids_branch_drops_malformed():
    query = resolve_filter(BookFilter(ids=[GOOD, "not-an-id"]))
    assert query == ByIds((GOOD,))


def test_ids_branch_only_malformed_stays_on_ids():
    query = resolve_filter(BookFilter(ids=["not-an-id"], author="Tolkien"))
    assert query == ByIds(())
    assert query_criteria(query) is None


def test_empty_ids_falls_through_to_author():
    assert resolve_filter(BookFilter(ids=[], author="Tolkien")) == ByAuthor("Tolkien")


def test_ids_take_precedence_over_author_and_range():
    book_filter = BookFilter(ids=[GOOD], author="Tolkien", start_date="1950", end_date="1960")
    assert resolve_filter(book_filter) == ByIds((GOOD,))


def test_author_takes_precedence_over_range():
    book_filter = BookFilter(author="Tolkien", start_date="1950", end_date="1960")
    assert resolve_filter(book_filter) == ByAuthor("Tolkien")


def test_empty_author_is_present():
    assert resolve_filter(BookFilter(author="")) == ByAuthor("")


def test_complete_range():
    book_filter = BookFilter(startDate="1950", endDate=" 1960 ")
    assert resolve_filter(book_filter) == ByYearRange(1950, 1960)


@pytest.mark.parametrize("start,end", [("1950", None), (None, "1960"), ("fifties", "1960"), ("1950", "")])
def test_incomplete_range_is_no_match(start, end):
    assert resolve_filter(BookFilter(start_date=start, end_date=end)) == NoMatch()


@pytest.mark.parametrize("end", ["99999999999999999999", str(2**63), "-" + str(2**63 + 1)])
def test_out_of_range_bound_is_no_match(end):
    assert resolve_filter(BookFilter(start_date="1950", end_date=end)) == NoMatch()


@pytest.mark.parametrize("start", ["1_950", "١٩٥٠", "19 50", "0x7a6"])
def test_non_decimal_bound_is_no_match(start):
    assert resolve_filter(BookFilter(start_date=start, end_date="1960")) == NoMatch()


def test_empty_filter_is_no_match():
    query = resolve_filter(BookFilter())
    assert query == NoMatch()
    assert query_criteria(query) is None


def test_limit_ignored_when_filtered():
    assert resolve_filter(BookFilter(author="X"), 1) == ByAuthor("X")


def test_parse_year():
    assert parse_year("1955") == 1955
    assert parse_year("-44") == -44
    assert parse_year(None) is None
    assert parse_year("19.5") is None
    assert parse_year("+1950") == 1950
    assert parse_year("1_950") is None
    assert parse_year(str(2**63 - 1)) == 2**63 - 1
    assert parse_year(str(2**63)) is None
    assert parse_year(str(-(2**63))) == -(2**63)


def test_unfiltered_criteria_match_all():
    assert query_criteria(Unfiltered(5)) == []


# --- find_books ---

async def _seed(repository, *books):
    return [await repository.save(**b) for b in books]


@pytest.mark.asyncio
async def test_find_books_unfiltered_limit(repository):
    saved = await _seed(repository, *({"title": f"Book {i}"} for i in range(5)))
    result = await find_books(repository, None, 2)
    assert [b.id for b in result] == [saved[0].id, saved[1].id]

    result = await find_books(repository, None)
    assert len(result) == 5


@pytest.mark.asyncio
async def test_find_books_by_ids(repository):
    first, second = await _seed(repository, {"title": "A"}, {"title": "B"})
    result = await find_books(repository, BookFilter(ids=[second.id, "not-an-id"]))
    assert [b.id for b in result] == [second.id]


@pytest.mark.asyncio
async def test_find_books_only_malformed_ids(repository):
    await _seed(repository, {"title": "A", "author": "Tolkien"})
    result = await find_books(repository, BookFilter(ids=["not-an-id"], author="Tolkien"))
    assert result == []


@pytest.mark.asyncio
async def test_find_books_ids_ignore_author(repository):
    tolkien, other = await _seed(
        repository,
        {"title": "The Hobbit", "author": "Tolkien"},
        {"title": "Dune", "author": "Frank Herbert"},
    )
    result = await find_books(repository, BookFilter(ids=[other.id], author="Tolkien"))
    assert [b.id for b in result] == [other.id]


@pytest.mark.asyncio
async def test_find_books_author_exact(repository):
    exact, _, _ = await _seed(
        repository,
        {"title": "The Hobbit", "author": "Tolkien"},
        {"title": "Fake Hobbit", "author": "tolkien"},
        {"title": "Silmarillion", "author": "J.R.R. Tolkien"},
    )
    result = await find_books(repository, BookFilter(author="Tolkien"))
    assert [b.id for b in result] == [exact.id]


@pytest.mark.asyncio
async def test_find_books_year_range_inclusive(repository):
    books = await _seed(repository, *({"title": str(y), "year": y} for y in (1949, 1955, 1960, 1961)))
    await _seed(repository, {"title": "Undated"})
    result = await find_books(repository, BookFilter(startDate="1950", endDate="1960"))
    assert [b.year for b in result] == [1955, 1960]
    assert [b.id for b in result] == [books[1].id, books[2].id]


@pytest.mark.asyncio
async def test_find_books_half_range_is_empty(repository):
    await _seed(repository, {"title": "A", "year": 1955})
    assert await find_books(repository, BookFilter(startDate="1950")) == []
    assert await find_books(repository, BookFilter(endDate="1960")) == []


@pytest.mark.asyncio
async def test_find_books_huge_bound_is_empty(repository):
    await _seed(repository, {"title": "A", "year": 1955})
    book_filter = BookFilter(startDate="1950", endDate="99999999999999999999")
    assert await find_books(repository, book_filter) == []


@pytest.mark.asyncio
async def test_find_books_empty_filter_is_empty(repository):
    await _seed(repository, {"title": "A"})
    assert await find_books(repository, BookFilter(), 10) == []
