from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select
import logging

from online_library.core.exceptions import bad_request, not_found
from online_library.models import Book, Favorite

logger = logging.getLogger(__name__)


async def get_favorite(db: AsyncSession, user_id: int, book_id: int) -> Favorite | None:
    return await db.get(Favorite, (user_id, book_id))


async def list_favorite_books(db: AsyncSession, user_id: int) -> list[Book]:
    """Books (not the join rows) the user has added to favorites."""
    result = await db.scalars(
        select(Book)
        .join(Favorite, Favorite.book_id == Book.id)
        .where(Favorite.user_id == user_id)
        .options(selectinload(Book.authors), selectinload(Book.genres))
        .order_by(Book.id)
    )
    return list(result.all())


async def add_favorite(db: AsyncSession, user_id: int, book_id: int) -> Favorite:
    """
    Add a book to the user's favorites.

    Raises:
        HTTPException 404: Book does not exist
        HTTPException 400: Book is already in favorites
    """
    if await db.get(Book, book_id) is None:
        not_found("Book not found")

    # Fast path for a clear message; the composite primary key is the real guard
    if await get_favorite(db, user_id, book_id) is not None:
        bad_request("Book is already in favorites")

    favorite = Favorite(user_id=user_id, book_id=book_id)
    db.add(favorite)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"⚠️ Concurrent duplicate favorite ({user_id}, {book_id}): {e}")
        bad_request("Book is already in favorites")

    logger.info(f"⭐ Favorite added: user={user_id}, book={book_id}")
    return favorite


async def remove_favorite(db: AsyncSession, user_id: int, book_id: int) -> None:
    favorite = await get_favorite(db, user_id, book_id)
    if favorite is None:
        not_found("Book not found in favorites")

    await db.delete(favorite)
    await db.commit()
    logger.info(f"✅ Favorite removed: user={user_id}, book={book_id}")
