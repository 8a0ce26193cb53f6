from sqlalchemy import Column, String, Integer, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from online_library.database.db import Base
from online_library.models.enum import UserRole


# ---------- User ---------- #
class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_user_email"),
        CheckConstraint("role IN ('admin', 'client')", name="ck_user_role"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(
        String, nullable=False, default=UserRole.CLIENT.value, server_default="client"
    )

    # Favorites owned by the user
    favorites = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
