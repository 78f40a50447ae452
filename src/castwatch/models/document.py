"""Pydantic v2 models for scanned documents and persisted match records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from castwatch.models.contact import ContactCategory, MatchType
from castwatch.utils.keys import credit_key, normalize_url, publication_from_url, record_id

# ---------------------------------------------------------------------------
# Enums as Literal unions
# ---------------------------------------------------------------------------

MatchLocation = Literal[
    "title",
    "excerpt",
    "content",
    "full",
    "credit",
]

MediaType = Literal["movie", "tv"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class Article(BaseModel):
    """A trade-press article with whatever text the fetcher could provide.

    ``content`` is the body text that came with the listing (RSS/API);
    ``full_text`` is the separately fetched and cleaned article page.
    """

    url: str
    title: str
    excerpt: str = ""
    content: str = ""
    full_text: str = ""
    published_at: datetime | None = None
    publication: str | None = None

    @property
    def document_key(self) -> str:
        return normalize_url(self.url)

    @property
    def source(self) -> str:
        return self.publication or publication_from_url(self.url)


class Credit(BaseModel):
    """One cast or crew credit on a premiere."""

    name: str
    character: str | None = None  # cast only
    job: str | None = None  # crew only
    department: str | None = None

    @property
    def role(self) -> str:
        if self.character is not None:
            return f"Actor as {self.character}"
        return self.job or "crew member"


class Premiere(BaseModel):
    """A movie or TV premiere and, once fetched, its credits."""

    model_config = {"coerce_numbers_to_str": True}

    id: str
    title: str
    media_type: MediaType
    release_date: str | None = None  # YYYY-MM-DD
    overview: str | None = None
    poster_path: str | None = None
    cast: list[Credit] = Field(default_factory=list)
    crew: list[Credit] = Field(default_factory=list)

    @property
    def document_key(self) -> str:
        return credit_key(self.media_type, self.id)

    @property
    def credits(self) -> list[Credit]:
        """Cast first, then crew."""
        return [*self.cast, *self.crew]


# ---------------------------------------------------------------------------
# Output contract
# ---------------------------------------------------------------------------


class MatchRecord(BaseModel):
    """A confirmed contact-in-document finding, unique per (document_key, contact_id)."""

    model_config = {"coerce_numbers_to_str": True}

    document_key: str
    contact_id: str
    user_id: str | None = None

    # contact snapshot
    contact_name: str
    contact_category: ContactCategory = "OTHER"
    contact_email: str | None = None

    # document metadata
    document_title: str
    document_url: str | None = None
    source: str  # publication slug, or "movie" / "tv" for premieres
    match_location: MatchLocation
    excerpt: str = ""

    # match detail
    match_type: MatchType = "exact"
    match_score: int = 100
    role: str | None = None  # premiere credits only

    found_at: datetime = Field(default_factory=_utcnow)
    is_new: bool = True
    is_read: bool = False

    @property
    def record_id(self) -> str:
        return record_id(self.document_key, self.contact_id)
