from typing import Annotated
from fastapi import APIRouter, Depends, Path, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from online_library.core.exceptions import not_found
from online_library.database.auth import AdminPrincipal
from online_library.database.db import MAX_ID
from online_library.database.db_depends import get_db
from online_library.schemas.book import BookCreate, BookOut
from online_library.services.book_service import (
    get_all_books,
    get_book_by_id,
    create_book,
    delete_book,
    export_books_csv,
)


router = APIRouter(prefix="/books", tags=["Books"])
DBType = Annotated[AsyncSession, Depends(get_db)]
BookId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.get("", response_model=list[BookOut], summary="List all books")
async def read_books(db: DBType):
    """All books with their authors and genres. No authentication required."""
    return await get_all_books(db)


# Declared before "/{book_id}" so "export" is not parsed as an id
@router.get(
    "/export",
    summary="[Admin] Export books to CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_books(db: DBType, admin: AdminPrincipal):
    content = await export_books_csv(db)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=books.csv"},
    )


@router.get("/{book_id}", response_model=BookOut, summary="Get a book by id")
async def get_book(db: DBType, book_id: BookId):
    book = await get_book_by_id(db, book_id)
    if not book:
        not_found(f"Book {book_id} not found")
    return book


@router.post(
    "",
    response_model=BookOut,
    status_code=status.HTTP_201_CREATED,
    summary="[Admin] Add a book",
)
async def add_book(
    request: Request,
    response: Response,
    db: DBType,
    data: BookCreate,
    admin: AdminPrincipal,
):
    """
    Create a book.

    - **title**: Book title
    - **authors**: `{"id": ...}` to link an existing author, `{"name": ...}` to create one
    - **genres**: same as authors
    """
    book = await create_book(db, data)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return book


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="[Admin] Delete a book",
)
async def remove_book(db: DBType, book_id: BookId, admin: AdminPrincipal):
    await delete_book(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
