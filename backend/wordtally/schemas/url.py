"""
WordTally Backend — URL Request/Response Schemas
=================================================

What:  Pydantic models defining the /url API contract.
Why:   Strict input validation and OpenAPI doc generation. Schemas are kept
       apart from the ORM model so the JSON field names (`wordcount`,
       `isFavorite`, `url_id`) stay stable if columns are renamed.
"""

import re
import uuid
from typing import List

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from wordtally.models.url_record import UrlRecord

INVALID_URL = "URL must be an absolute http or https URL"

# One DNS label of the ASCII (punycode) host
HOST_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")

_http_url = TypeAdapter(HttpUrl)


def parse_http_url(value: str) -> HttpUrl:
    """
    Parse an absolute http(s) URL.

    HttpUrl handles scheme, port range and forbidden host characters; hosts
    are additionally limited to DNS labels (or an IP literal) so that names
    like `a_b!c.com` are refused here instead of failing at fetch time.

    Raises:
        ValueError: The value is not a fetchable http(s) URL
    """
    try:
        url = _http_url.validate_python(value)
    except ValidationError:
        raise ValueError(INVALID_URL)

    host = url.host or ""
    if not host.startswith("[") and not all(HOST_LABEL.match(label) for label in host.split(".")):
        raise ValueError(INVALID_URL)
    return url


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AddUrlRequest(BaseModel):
    """Body of POST /url/add."""
    url: str = Field(min_length=1, max_length=2048, description="Absolute http(s) URL to count")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only absolute http(s) URLs with a host can be fetched and grouped by domain."""
        v = v.strip()
        parse_http_url(v)
        # The submitted text is stored and echoed as-is; HttpUrl would add a
        # trailing slash to bare hosts
        return v


class FavoriteRequest(BaseModel):
    """Body of PUT /url/favorite/change."""
    url_id: uuid.UUID = Field(description="Id of the URL record")
    is_favorite: bool = Field(alias="isFavorite", description="Desired favorite flag")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UrlOut(BaseModel):
    """One stored URL as the client sees it."""
    id: uuid.UUID
    domain: str
    url: str
    wordcount: int = Field(ge=0)
    favorite: bool

    @classmethod
    def from_record(cls, record: UrlRecord) -> "UrlOut":
        return cls(
            id=record.id,
            domain=record.domain,
            url=record.url,
            wordcount=record.word_count,
            favorite=record.favorite,
        )


class AddUrlResponse(BaseModel):
    success: bool = Field(default=True)
    url: UrlOut


class UrlListResponse(BaseModel):
    """
    Page of a user's URLs for one domain, ordered by url.

    Pagination:
        Pass the `url` of the last item as the `url` query parameter to get
        the next page. An empty list means there is nothing further.
    """
    success: bool = Field(default=True)
    urls: List[UrlOut]


class DomainListResponse(BaseModel):
    success: bool = Field(default=True)
    domains: List[str] = Field(description="Distinct domains, ascending")


class CountResponse(BaseModel):
    success: bool = Field(default=True)
    dcount: int = Field(ge=0, description="Number of records for the domain")
    wcount: int = Field(ge=0, description="Sum of their word counts")
