"""SQLAlchemy models for the users domain."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String
from sqlalchemy.sql.sqltypes import TIMESTAMP

from projecthub.core.database import Base
from projecthub.core.db_defaults import timestamp_default


class User(Base):
    """Registered account; projects reference it as owner, member or version author."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, nullable=False)
    username = Column(String(30), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=timestamp_default()
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


__all__ = ["User"]
