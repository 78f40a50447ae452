"""Data models for castwatch."""

from castwatch.models.contact import (
    CONTACT_CATEGORIES,
    Contact,
    ContactCategory,
    MatchResult,
    MatchType,
)
from castwatch.models.document import (
    Article,
    Credit,
    MatchLocation,
    MatchRecord,
    MediaType,
    Premiere,
)
from castwatch.models.name_index import (
    NameIndex,
    build_first_name_variant_index,
    build_last_name_index,
)

__all__ = [
    "CONTACT_CATEGORIES",
    "Article",
    "Contact",
    "ContactCategory",
    "Credit",
    "MatchLocation",
    "MatchRecord",
    "MatchResult",
    "MatchType",
    "MediaType",
    "NameIndex",
    "Premiere",
    "build_first_name_variant_index",
    "build_last_name_index",
]
