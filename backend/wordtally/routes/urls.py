"""
WordTally Backend — URL Route Handlers
=======================================

What:  The /url endpoints: add, list, list domains, favorite, delete, count.
Why:   HTTP surface of the URL pipeline.
How:   Every handler depends on get_current_user_id, so an unauthenticated
       request is rejected (401) before the handler runs. The verified id and
       the request's session go to UrlService; the handler only wraps the
       result in the response envelope.

Caching Strategy:
    Lists change whenever a URL is added, favorited or deleted, so list and
    count responses are marked `private, no-store`.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wordtally.database import get_db_session
from wordtally.dependencies import get_current_user_id
from wordtally.schemas.common import ErrorResponse, SuccessResponse
from wordtally.schemas.url import (
    AddUrlRequest,
    AddUrlResponse,
    CountResponse,
    DomainListResponse,
    FavoriteRequest,
    UrlListResponse,
)
from wordtally.services.url_service import DEFAULT_LIMIT, url_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/url", tags=["URLs"])

UNAUTHORIZED = {401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}}
NO_STORE = "private, no-store"


@router.post(
    "/add",
    status_code=201,
    response_model=AddUrlResponse,
    responses={
        400: {"description": "Invalid URL or URL already counted", "model": ErrorResponse},
        500: {"description": "Page fetch or store failure", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Count the words of a page and store the result",
)
async def add_url(
    body: AddUrlRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> AddUrlResponse:
    """
    Fetch `url`, count its words and store the record.

    Example:
        POST /url/add {"url": "http://example.com"}
        → 201 {"success": true, "url": {"domain": "example.com", "wordcount": 2, ...}}
    """
    record = await url_service.add_url(db, user_id, body.url)
    return AddUrlResponse(url=record)


@router.get(
    "/list",
    response_model=UrlListResponse,
    responses=UNAUTHORIZED,
    summary="List stored URLs for a domain",
)
async def list_urls(
    response: Response,
    domain: str = Query(..., min_length=1, max_length=255, description="Domain to list"),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100, description="Page size"),
    url: Optional[str] = Query(
        default=None,
        max_length=2048,
        description="Pagination cursor: the last url of the previous page",
    ),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> UrlListResponse:
    urls = await url_service.list_urls(db, user_id, domain, limit=limit, after_url=url)
    response.headers["Cache-Control"] = NO_STORE
    return UrlListResponse(urls=urls)


@router.get(
    "/list/domains",
    response_model=DomainListResponse,
    responses=UNAUTHORIZED,
    summary="List the distinct domains of stored URLs",
)
async def list_domains(
    response: Response,
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> DomainListResponse:
    domains = await url_service.list_domains(db, user_id, limit=limit)
    response.headers["Cache-Control"] = NO_STORE
    return DomainListResponse(domains=domains)


@router.put(
    "/favorite/change",
    response_model=SuccessResponse,
    responses={
        404: {"description": "No such URL for this user", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Set or clear the favorite flag",
)
async def change_favorite(
    body: FavoriteRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await url_service.set_favorite(db, user_id, body.url_id, body.is_favorite)
    return SuccessResponse()


@router.delete(
    "/delete",
    response_model=SuccessResponse,
    responses={
        404: {"description": "No such URL for this user", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Delete a stored URL",
)
async def delete_url(
    id: UUID = Query(..., description="Id of the URL record"),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await url_service.delete_url(db, user_id, id)
    return SuccessResponse()


@router.get(
    "/count",
    response_model=CountResponse,
    responses=UNAUTHORIZED,
    summary="Record count and total words for a domain",
)
async def count_domain(
    response: Response,
    domain: str = Query(..., min_length=1, max_length=255),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CountResponse:
    dcount, wcount = await url_service.count_domain(db, user_id, domain)
    response.headers["Cache-Control"] = NO_STORE
    return CountResponse(dcount=dcount, wcount=wcount)
