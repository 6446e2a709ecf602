from fastapi import APIRouter, Depends, HTTPException, Query

from bookcatalog.filters import find_books
from bookcatalog.repository import BookRepository, get_repository
from bookcatalog.schemas.book import BookFiltersInput, BookIdResponse, BookInput, BookResponse

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=list[BookResponse])
async def list_books(
    limit: int | None = Query(None, ge=0, description="Maximum number of books to return"),
    repository: BookRepository = Depends(get_repository),
):
    return await repository.find(limit=limit)


@router.post("/query", response_model=list[BookResponse])
async def query_books(
    data: BookFiltersInput | None = None,
    repository: BookRepository = Depends(get_repository),
):
    if data is None:
        data = BookFiltersInput()
    return await find_books(repository, data.filter, data.limit)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: str, repository: BookRepository = Depends(get_repository)):
    book = await repository.find_by_id(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.post("", response_model=BookIdResponse, status_code=201)
async def create_book(data: BookInput, repository: BookRepository = Depends(get_repository)):
    book = await repository.save(**data.model_dump())
    return BookIdResponse(id=book.id)


@router.put("/{book_id}", response_model=BookIdResponse)
async def update_book(
    book_id: str, data: BookInput, repository: BookRepository = Depends(get_repository)
):
    await repository.update_fields(book_id, data.model_dump(exclude_unset=True))
    return BookIdResponse(id=book_id)


@router.delete("/{book_id}", response_model=BookIdResponse)
async def delete_book(book_id: str, repository: BookRepository = Depends(get_repository)):
    await repository.delete_by_id(book_id)
    return BookIdResponse(id=book_id)
