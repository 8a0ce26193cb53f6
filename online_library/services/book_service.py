from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy import select
import logging

from online_library.core.exceptions import bad_request, not_found
from online_library.models import Author, Book, Genre
from online_library.schemas.book import BookCreate, NamedRef

logger = logging.getLogger(__name__)

CSV_HEADER = "Id,Title,Authors,Genres"
CSV_EMPTY = "None"
CSV_LIST_SEPARATOR = ";"


def _with_associations(stmt):
    return stmt.options(selectinload(Book.authors), selectinload(Book.genres))


async def get_all_books(db: AsyncSession) -> list[Book]:
    result = await db.scalars(_with_associations(select(Book)).order_by(Book.id))
    return list(result.all())


async def get_book_by_id(db: AsyncSession, book_id: int) -> Book | None:
    return await db.scalar(_with_associations(select(Book)).where(Book.id == book_id))


async def _resolve_refs(db: AsyncSession, model, refs: list[NamedRef]) -> list:
    """Existing rows for `{"id": ...}` refs, new rows for `{"name": ...}` refs."""
    items = []
    for ref in refs:
        if ref.id is not None:
            item = await db.get(model, ref.id)
            if item is None:
                bad_request(f"{model.__name__} {ref.id} does not exist")
        else:
            item = model(name=ref.name)
            db.add(item)
        if item not in items:
            items.append(item)
    return items


async def create_book(db: AsyncSession, data: BookCreate) -> Book:
    authors = await _resolve_refs(db, Author, data.authors)
    genres = await _resolve_refs(db, Genre, data.genres)

    book = Book(title=data.title, authors=authors, genres=genres)
    db.add(book)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError creating book: {e}")
        bad_request("Book could not be created")

    await db.refresh(book, attribute_names=["authors", "genres"])
    logger.info(f"✅ Book created: {book.id} - {book.title}")
    return book


async def delete_book(db: AsyncSession, book_id: int) -> None:
    """Remove a book. Association rows and favorites go with it via ON DELETE CASCADE."""
    book = await db.get(Book, book_id)
    if not book:
        not_found(f"Book {book_id} not found")

    await db.delete(book)
    await db.commit()
    logger.info(f"🗑️ Book deleted: {book_id}")


def _join_names(items) -> str:
    if not items:
        return CSV_EMPTY
    return CSV_LIST_SEPARATOR.join(item.name for item in items)


def books_to_csv(books: list[Book]) -> str:
    """
    Render books as CSV.

    Fields are written as-is, with no quoting or escaping: a title holding
    a comma or a line break shifts the columns of its row. Clients depend on
    this exact layout.
    """
    lines = [CSV_HEADER]
    for book in books:
        lines.append(
            f"{book.id},{book.title},{_join_names(book.authors)},{_join_names(book.genres)}"
        )
    return "".join(f"{line}\n" for line in lines)


async def export_books_csv(db: AsyncSession) -> bytes:
    books = await get_all_books(db)
    logger.info(f"📤 Exporting {len(books)} books to CSV")
    return books_to_csv(books).encode("utf-8")
