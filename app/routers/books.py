# =============================================================================
# app/routers/books.py - Book CRUD Endpoints
# =============================================================================
# Mounted at /books:
#   GET    /books          list all books
#   GET    /books/{id}     fetch one book
#   POST   /books          create a book
#   PUT    /books/{id}     replace a book's fields
#   DELETE /books/{id}     delete a book
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response

from app.controller import ResourceController
from app.dependencies import BookStoreDep
from core.models.book import BookPayload

router = APIRouter()

BookId = Annotated[str, Path(description="Book ObjectId")]


@router.get("")
async def list_books(store: BookStoreDep) -> Response:
    """List every book in the collection."""
    return await ResourceController(store).list()


@router.get("/{book_id}")
async def get_book(book_id: BookId, store: BookStoreDep) -> Response:
    """Get a single book. Unknown and malformed ids both return 404."""
    return await ResourceController(store).get(book_id)


@router.post("", status_code=201)
async def create_book(store: BookStoreDep, payload: BookPayload | None = None) -> Response:
    """
    Create a book.

    `title` and `author` are required; `year` defaults to the current year
    and `isAvailable` to true.
    """
    return await ResourceController(store).create(payload or BookPayload())


@router.put("/{book_id}")
async def update_book(
    book_id: BookId,
    store: BookStoreDep,
    payload: BookPayload | None = None,
) -> Response:
    """
    Replace a book's fields.

    Fields left out of the body fall back to their defaults.
    """
    return await ResourceController(store).update(book_id, payload or BookPayload())


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: BookId, store: BookStoreDep) -> Response:
    """Delete a book. Responds 204 with an empty body."""
    return await ResourceController(store).delete(book_id)
