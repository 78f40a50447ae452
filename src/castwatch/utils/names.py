"""Name normalisation and given-name variant helpers.

Everything here is pure and total: unknown or empty input degrades to an
identity (or empty) result rather than raising.
"""

from __future__ import annotations

import re

from castwatch.utils.nicknames import NAME_VARIATIONS

_NON_WORD = re.compile(r"[^\w]")


def normalize(value: str | None) -> str:
    """Lowercase and strip leading/trailing whitespace."""
    if not isinstance(value, str):
        return ""
    return value.lower().strip()


def clean_token(token: str) -> str:
    """Normalise a single whitespace-delimited token and drop punctuation."""
    return _NON_WORD.sub("", normalize(token))


def split_name(name: str | None) -> list[str]:
    """Split a normalised name into its whitespace-separated parts."""
    return normalize(name).split()


def name_variants(first_name: str | None) -> set[str]:
    """Return *first_name* normalised plus every known nickname equivalent.

    >>> sorted(name_variants("Robert"))
    ['bob', 'bobby', 'rob', 'robert']

    Names missing from the alias table come back as a singleton set.
    """
    norm = normalize(first_name)
    if not norm:
        return set()
    return {norm, *NAME_VARIATIONS.get(norm, ())}


def is_partial_name_match(name1: str, name2: str, min_length: int = 3) -> bool:
    """True when one name is a prefix of the other and both are long enough.

    Catches shortened first names the alias table does not know about, e.g.
    ``"Opey"`` for ``"Opeyemi"``.
    """
    norm1 = normalize(name1)
    norm2 = normalize(name2)
    if len(norm1) < min_length or len(norm2) < min_length:
        return False
    return norm1.startswith(norm2) or norm2.startswith(norm1)


def find_excerpt(text: str, name: str, context: int = 200) -> str:
    """Return the passage of *text* around the first mention of *name*.

    The window extends ``context // 2`` characters either side of the
    mention and is marked with ``...`` where it was cut.  When *name* does
    not occur, the opening ``context`` characters are returned instead.
    """
    index = text.lower().find(name.lower())
    if index == -1:
        return text[:context] + "..."

    half = context // 2
    start = max(0, index - half)
    end = min(len(text), index + len(name) + half)

    excerpt = text[start:end]
    if start > 0:
        excerpt = "..." + excerpt
    if end < len(text):
        excerpt = excerpt + "..."
    return excerpt.strip()
