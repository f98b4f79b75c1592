"""
WordTally Backend — URL Service (Business Logic Orchestrator)
==============================================================

What:  The URL pipeline: add (fetch + count + persist), list, favorite,
       delete, and the per-domain aggregates.
Why:   Keeps all URL business rules in one place, independent of HTTP.
How:   Composes the page fetcher, the word counter and database operations.
Who:   Called by the /url route handlers with a request-scoped session and
       the verified user id from the auth guard.

Orchestration Flow (POST /url/add):
    ┌───────────┐    ┌────────────┐    ┌───────────┐    ┌─────────┐    ┌─────────┐
    │ Duplicate │───▶│ Fetch page │───▶│  Count    │───▶│ Derive  │───▶│ Insert  │
    │  check    │    │ (fetcher)  │    │  words    │    │ domain  │    │ record  │
    └───────────┘    └────────────┘    └───────────┘    └─────────┘    └─────────┘

    A duplicate stops the flow before any network traffic. A fetch failure
    stops it before any write. Either way the request's session is rolled
    back by get_db_session.

    The duplicate check is committed before the fetch, so the session holds
    no connection while the page is downloaded (up to FETCH_TIMEOUT). The
    insert runs in a fresh transaction committed by get_db_session.

Duplicate detection:
    The existence check and the insert are two statements, so two identical
    requests can both pass the check. The unique constraint on
    (user_id, url) rejects the second insert, and that IntegrityError is
    reported as the same ConflictError.

Ownership:
    Every query filters on user_id. A record id that belongs to someone else
    behaves exactly like an id that does not exist.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wordtally.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from wordtally.models.url_record import UrlRecord
from wordtally.schemas.url import UrlOut, parse_http_url
from wordtally.services.page_fetcher import PageFetcher, page_fetcher
from wordtally.services.word_counter import count_words

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def domain_of(url: str) -> str:
    """Host component of `url`, lowercased, without port or credentials."""
    try:
        return parse_http_url(url).host
    except ValueError as e:
        raise ValidationError(message=str(e), field="url")


class UrlService:
    """
    Business logic for URL records.

    Stateless apart from the injected fetcher; safe to share across
    concurrent requests.
    """

    def __init__(self, fetcher: PageFetcher = page_fetcher):
        self.fetcher = fetcher

    async def _find_owned(self, db: AsyncSession, user_id: UUID, record_id: UUID) -> UrlRecord:
        try:
            result = await db.execute(
                select(UrlRecord).where(
                    UrlRecord.id == record_id,
                    UrlRecord.user_id == user_id,
                )
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching url %s: %s", record_id, str(e))
            raise DatabaseError(context={"record_id": str(record_id)})

        if record is None:
            raise NotFoundError(resource="url", resource_id=str(record_id))
        return record

    async def add_url(self, db: AsyncSession, user_id: UUID, url: str) -> UrlOut:
        """
        Count the words of `url` and store the result for `user_id`.

        Returns:
            The created record.

        Raises:
            ConflictError: The user already has this URL (→ 400)
            UpstreamError: The page could not be fetched (→ 500)
            DatabaseError: The store failed (→ 500)
        """
        domain = domain_of(url)

        try:
            existing = await db.execute(
                select(UrlRecord.id).where(
                    UrlRecord.user_id == user_id,
                    UrlRecord.url == url,
                )
            )
            duplicate = existing.first() is not None
            if not duplicate:
                # End the read transaction so no pooled connection is held
                # for the length of the fetch
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error checking for duplicate url: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if duplicate:
            logger.info("User %s already counted %s", user_id, url)
            raise ConflictError(context={"url": url})

        body = await self.fetcher.fetch(url)
        word_count = count_words(body)

        record = UrlRecord(
            user_id=user_id,
            url=url,
            domain=domain,
            word_count=word_count,
            favorite=False,
        )
        try:
            db.add(record)
            await db.flush()
        except IntegrityError:
            logger.info("Concurrent add of %s for user %s rejected by constraint", url, user_id)
            raise ConflictError(context={"url": url})
        except SQLAlchemyError as e:
            logger.error("Database error storing url: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Stored %s (%s): %d words", record.id, domain, word_count)
        return UrlOut.from_record(record)

    async def list_urls(
        self,
        db: AsyncSession,
        user_id: UUID,
        domain: str,
        limit: int = DEFAULT_LIMIT,
        after_url: Optional[str] = None,
    ) -> List[UrlOut]:
        """
        Records of `user_id` under `domain`, ordered by url.

        Cursor pagination: `after_url` is the last url of the previous page;
        only urls strictly greater are returned.
        """
        query = select(UrlRecord).where(
            UrlRecord.user_id == user_id,
            UrlRecord.domain == domain.lower(),
        )
        if after_url:
            query = query.where(UrlRecord.url > after_url)
        query = query.order_by(UrlRecord.url).limit(limit)

        try:
            result = await db.execute(query)
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing urls: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [UrlOut.from_record(record) for record in records]

    async def list_domains(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: int = DEFAULT_LIMIT,
    ) -> List[str]:
        """Distinct domains across the user's records, ascending."""
        query = (
            select(UrlRecord.domain)
            .where(UrlRecord.user_id == user_id)
            .distinct()
            .order_by(UrlRecord.domain)
            .limit(limit)
        )
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing domains: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def count_domain(
        self,
        db: AsyncSession,
        user_id: UUID,
        domain: str,
    ) -> Tuple[int, int]:
        """
        Returns:
            (number of records, sum of their word counts) for the domain.
        """
        query = select(
            func.count(UrlRecord.id),
            func.coalesce(func.sum(UrlRecord.word_count), 0),
        ).where(
            UrlRecord.user_id == user_id,
            UrlRecord.domain == domain.lower(),
        )
        try:
            result = await db.execute(query)
            dcount, wcount = result.one()
        except SQLAlchemyError as e:
            logger.error("Database error counting domain: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return int(dcount), int(wcount)

    async def set_favorite(
        self,
        db: AsyncSession,
        user_id: UUID,
        record_id: UUID,
        favorite: bool,
    ) -> None:
        """Set the favorite flag. Setting the current value again is a no-op."""
        record = await self._find_owned(db, user_id, record_id)
        if record.favorite == favorite:
            return

        record.favorite = favorite
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating url %s: %s", record_id, str(e))
            raise DatabaseError(context={"record_id": str(record_id)})

    async def delete_url(self, db: AsyncSession, user_id: UUID, record_id: UUID) -> None:
        """
        Remove a record.

        Raises:
            NotFoundError: No such record for this user, including a record
                that was already deleted (→ 404)
        """
        record = await self._find_owned(db, user_id, record_id)
        try:
            await db.delete(record)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting url %s: %s", record_id, str(e))
            raise DatabaseError(context={"record_id": str(record_id)})

        logger.info("Deleted url %s for user %s", record_id, user_id)


url_service = UrlService()
