"""Pydantic v2 models for tracked contacts and match verdicts."""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Enums as Literal unions
# ---------------------------------------------------------------------------

ContactCategory = Literal[
    "ACTOR",
    "DIRECTOR",
    "PRODUCER",
    "AGENT",
    "EXECUTIVE",
    "WRITER",
    "OTHER",
]

CONTACT_CATEGORIES: tuple[str, ...] = get_args(ContactCategory)

MatchType = Literal[
    "exact",
    "fuzzy",
    "nickname",
    "partial",
    "none",
]


# ---------------------------------------------------------------------------
# Core models
# ---------------------------------------------------------------------------


class Contact(BaseModel):
    """A person one user tracks.

    Contacts are frozen: nothing in the matching path may change them.
    Numeric ids from upstream stores are accepted and kept as strings.
    """

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    category: ContactCategory = "OTHER"
    user_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{(self.first_name or '').strip()} {(self.last_name or '').strip()}".strip()

    @property
    def is_matchable(self) -> bool:
        """Both names present and non-blank."""
        return bool(self.first_name and self.first_name.strip()) and bool(
            self.last_name and self.last_name.strip()
        )


class MatchResult(BaseModel):
    """Outcome of comparing one contact name with one observed name."""

    model_config = {"frozen": True}

    is_match: bool
    score: int  # 0 - 100
    match_type: MatchType
