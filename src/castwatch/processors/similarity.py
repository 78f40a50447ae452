"""Token-sort similarity ratio on top of rapidfuzz's Levenshtein distance."""

from __future__ import annotations

import math

from rapidfuzz.distance import Levenshtein

from castwatch.utils.names import normalize


def _sorted_tokens(value: str) -> str:
    return " ".join(sorted(normalize(value).split()))


def similarity_ratio(a: str, b: str) -> int:
    """Return the token-sort ratio of *a* and *b* as an integer 0-100.

    Both strings are normalised, split on whitespace, sorted and rejoined,
    so ``"John Smith"`` and ``"Smith John"`` score 100.  The score is
    ``100 * (maxLen - distance) / maxLen`` with unit-cost Levenshtein
    distance, rounded half up.

    ``rapidfuzz.fuzz.token_sort_ratio`` is deliberately not used: it scores
    with Indel distance (no substitutions), which rates near-miss spellings
    differently.
    """
    sorted_a = _sorted_tokens(a)
    sorted_b = _sorted_tokens(b)

    if sorted_a == sorted_b:
        return 100
    if not sorted_a or not sorted_b:
        return 0

    similarity = Levenshtein.normalized_similarity(sorted_a, sorted_b)
    return math.floor(similarity * 100 + 0.5)
