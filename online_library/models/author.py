from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from online_library.database.db import Base
from online_library.models.associations import book_authors


# ---------- Author ---------- #
class Author(Base):
    __tablename__ = "authors"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    books = relationship(
        "Book", secondary=book_authors, back_populates="authors", passive_deletes=True
    )
