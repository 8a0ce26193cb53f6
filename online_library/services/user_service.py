from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
import logging

from online_library.models import (
    Author,
    Book,
    Favorite,
    Genre,
    User,
    book_authors,
    book_genres,
)
from online_library.models.enum import UserRole
from online_library.utils.hashing import hash_password


logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """
    Find a user by email.

    Args:
        db: Database session
        email: Exact email address

    Returns:
        User | None: The user or None
    """
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession, email: str, password: str, role: UserRole = UserRole.CLIENT
) -> User | None:
    """
    Create a user with a hashed password.

    Returns:
        User | None: The created user, or None if the email is already taken
    """
    if await get_user_by_email(db, email):
        logger.warning(f"⚠️ Attempt to create duplicate user: {email}")
        return None

    user = User(email=email, password_hash=hash_password(password), role=role.value)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError creating user {email}: {e}")
        return None

    await db.refresh(user)
    logger.info(f"✅ User created: {user.id} - {user.email} ({user.role})")
    return user


async def set_user_role(db: AsyncSession, email: str, role: UserRole) -> User | None:
    """
    Change the role of the user with the given email.

    Returns:
        User | None: The updated user, or None if no user has this email
    """
    user = await get_user_by_email(db, email)
    if not user:
        return None

    user.role = role.value
    await db.commit()
    logger.info(f"✅ Role of {email} set to {role.value}")
    return user


async def clear_database(db: AsyncSession) -> dict[str, int]:
    """Delete every row of every table. Irreversible."""
    counts = {}
    # Children first so foreign keys never block a delete
    for name, table in (
        ("favorites", Favorite.__table__),
        ("book_authors", book_authors),
        ("book_genres", book_genres),
        ("books", Book.__table__),
        ("authors", Author.__table__),
        ("genres", Genre.__table__),
        ("users", User.__table__),
    ):
        result = await db.execute(delete(table))
        counts[name] = result.rowcount
    await db.commit()
    logger.warning(f"🧹 Database cleared: {counts}")
    return counts
