from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, func

from user_crud.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    age = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_users_email", "email"),
        # keep ids monotonic on SQLite so deleted ids are never handed out again
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
