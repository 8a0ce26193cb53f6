from sqlalchemy import Column, String, Integer, CheckConstraint
from sqlalchemy.orm import relationship

from online_library.database.db import Base
from online_library.models.associations import book_authors, book_genres


# ---------- Book ---------- #
class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_book_title_not_empty"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)

    # 🔗 relations
    authors = relationship(
        "Author",
        secondary=book_authors,
        back_populates="books",
        order_by="Author.id",
        passive_deletes=True,
    )
    genres = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
        order_by="Genre.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
