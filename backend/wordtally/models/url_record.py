"""
WordTally Backend — URL Record SQLAlchemy Model
================================================

What:  ORM model representing the `urls` table.
Why:   One row per (user, url) with the word count measured when the URL was
       added.
Who:   Used by UrlService for every URL operation and by Alembic.

Table Design Rationale:
    - UUID primary key: opaque ids in the API, not guessable
    - domain: stored (not computed per query) so list/count filter on an index
    - word_count: measured once at creation; never refreshed
    - favorite: the only mutable column

    Unique (user_id, url):
        The add operation checks for an existing row first, but two identical
        requests can both pass that check. The constraint makes the second
        insert fail, and the service reports it as a conflict.

    Index (user_id, domain, url):
        Matches the list query (WHERE user_id AND domain ORDER BY url) and the
        per-domain count aggregate.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from wordtally.database import Base


class UrlRecord(Base):
    """
    A URL submitted by a user together with its page word count.

    Lifecycle:
        1. Created by the add operation after a successful fetch + count
        2. `favorite` toggled in place by the favorite operation
        3. Deleted by the delete operation
        url, domain and word_count never change after creation.
    """

    __tablename__ = "urls"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    # Host component of `url`, lowercased (e.g. "example.com")
    domain: Mapped[str] = mapped_column(String(255), nullable=False)

    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    favorite: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "url", name="uq_urls_user_url"),
        CheckConstraint("word_count >= 0", name="ck_urls_word_count_non_negative"),
        Index("idx_urls_user_domain_url", "user_id", "domain", "url"),
    )

    def __repr__(self) -> str:
        return (
            f"<UrlRecord(id={self.id}, domain='{self.domain}', "
            f"word_count={self.word_count}, favorite={self.favorite})>"
        )
