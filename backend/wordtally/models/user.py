"""
WordTally Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Why:   Bearer tokens carry a user id; the auth guard resolves that id here to
       reject tokens of accounts that have since been removed.
Who:   Written by AuthService (signup), read by the auth guard and login.

Email is stored lowercased so the unique index also rejects case variants.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wordtally.database import Base


class User(Base):
    """An account that owns URL records."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Login email, lowercased",
    )

    display_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # bcrypt output is 60 ASCII characters
    password_hash: Mapped[str] = mapped_column(String(60), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
