from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from online_library.database.db import Base


class Favorite(Base):
    """A user bookmark on a book, identified by (user_id, book_id)."""

    __tablename__ = "favorites"

    # Composite primary key: a user can favorite a given book once
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    book_id = Column(
        Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    # 🔗 relations (Book keeps no back-collection)
    user = relationship("User", back_populates="favorites")
    book = relationship("Book")
