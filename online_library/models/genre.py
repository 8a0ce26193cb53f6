from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from online_library.database.db import Base
from online_library.models.associations import book_genres


# ---------- Genre ---------- #
class Genre(Base):
    __tablename__ = "genres"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    books = relationship(
        "Book", secondary=book_genres, back_populates="genres", passive_deletes=True
    )
