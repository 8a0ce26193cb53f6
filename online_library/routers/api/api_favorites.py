from typing import Annotated
from fastapi import APIRouter, Body, Depends, Path
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from online_library.database.auth import CurrentUser
from online_library.database.db import MAX_ID
from online_library.database.db_depends import get_db
from online_library.schemas.book import BookOut
from online_library.services.favorite_service import (
    list_favorite_books,
    add_favorite,
    remove_favorite,
)


router = APIRouter(prefix="/favorites", tags=["Favorites"])
DBType = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=list[BookOut], summary="List my favorite books")
async def get_my_favorites(db: DBType, current_user: CurrentUser):
    return await list_favorite_books(db, current_user.id)


@router.post(
    "",
    response_class=PlainTextResponse,
    summary="Add a book to my favorites",
)
async def add_to_favorites(
    db: DBType,
    current_user: CurrentUser,
    book_id: Annotated[
        int, Body(ge=1, le=MAX_ID, description="Id of the book", examples=[1])
    ],
):
    """The request body is a bare JSON integer, e.g. `5`."""
    await add_favorite(db, current_user.id, book_id)
    return "Book added to favorites"


@router.delete(
    "/{book_id}",
    response_class=PlainTextResponse,
    summary="Remove a book from my favorites",
)
async def remove_from_favorites(
    db: DBType,
    book_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    current_user: CurrentUser,
):
    await remove_favorite(db, current_user.id, book_id)
    return "Book removed from favorites"
