"""Staged contact-name matcher.

Compares a contact's full name with an observed name (a credit, or a name
lifted from prose) and returns a :class:`MatchResult`:

1. **exact**    -- normalised strings are equal (score 100)
2. **fuzzy**    -- token-sort ratio meets the threshold (score = ratio)
3. **nickname** -- same surname, first names share an alias variant (95)
4. **partial**  -- same surname, one first name prefixes the other (93)
5. **none**     -- no stage matched (score = the stage-2 ratio)

The first stage that matches wins; later stages are not evaluated.  The
fixed nickname/partial scores signal a confidence tier rather than a
measured similarity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from castwatch.config import Settings
from castwatch.models.contact import MatchResult, MatchType
from castwatch.processors.similarity import similarity_ratio
from castwatch.utils.names import is_partial_name_match, name_variants, normalize

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 90
NICKNAME_SCORE = 95
PARTIAL_SCORE = 93
PARTIAL_MIN_LENGTH = 3


@dataclass
class MatchStats:
    """Running tally of comparisons and verdicts for one scan."""

    comparisons: int = 0
    by_type: dict[str, int] = field(
        default_factory=lambda: {"exact": 0, "fuzzy": 0, "nickname": 0, "partial": 0}
    )

    @property
    def matches(self) -> int:
        return sum(self.by_type.values())

    def record(self, result: MatchResult) -> None:
        self.comparisons += 1
        if result.is_match:
            self.by_type[result.match_type] += 1


class EntityMatcher:
    """Run the staged comparison with configurable threshold and tier scores.

    An explicit *threshold* takes precedence over ``settings.fuzzy_threshold``.
    """

    def __init__(self, settings: Settings | None = None, threshold: int | None = None) -> None:
        self.settings = settings
        if threshold is None:
            threshold = DEFAULT_THRESHOLD if settings is None else settings.fuzzy_threshold
        self.threshold = threshold
        self.nickname_score = NICKNAME_SCORE if settings is None else settings.nickname_score
        self.partial_score = PARTIAL_SCORE if settings is None else settings.partial_score
        self.partial_min_length = (
            PARTIAL_MIN_LENGTH if settings is None else settings.partial_min_length
        )
        self.stats = MatchStats()

    def match(
        self,
        contact_full_name: str,
        observed_name: str,
        threshold: int | None = None,
    ) -> MatchResult:
        """Compare *contact_full_name* with *observed_name*.

        *threshold* overrides the configured fuzzy threshold for this call.
        Never raises for string input; empty names give a ``none`` verdict.
        """
        result = self._compare(
            contact_full_name,
            observed_name,
            self.threshold if threshold is None else threshold,
        )
        self.stats.record(result)
        if result.is_match:
            logger.debug(
                "%s match: %r = %r (%d)",
                result.match_type,
                contact_full_name,
                observed_name,
                result.score,
            )
        return result

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _compare(self, contact_full_name: str, observed_name: str, threshold: int) -> MatchResult:
        contact_norm = normalize(contact_full_name)
        observed_norm = normalize(observed_name)

        if not contact_norm or not observed_norm:
            return _verdict(False, 0, "none")

        # Stage 1: exact
        if contact_norm == observed_norm:
            return _verdict(True, 100, "exact")

        # Stage 2: token-sort ratio
        ratio = similarity_ratio(contact_norm, observed_norm)
        if ratio >= threshold:
            return _verdict(True, ratio, "fuzzy")

        # Stages 3-4 need a first and last name on both sides, and equal surnames
        contact_parts = contact_norm.split()
        observed_parts = observed_norm.split()
        if len(contact_parts) < 2 or len(observed_parts) < 2:
            return _verdict(False, ratio, "none")
        if contact_parts[-1] != observed_parts[-1]:
            return _verdict(False, ratio, "none")

        contact_first = contact_parts[0]
        observed_first = observed_parts[0]

        # Stage 3: nickname
        if name_variants(contact_first) & name_variants(observed_first):
            return _verdict(True, self.nickname_score, "nickname")

        # Stage 4: partial first name
        if is_partial_name_match(contact_first, observed_first, self.partial_min_length):
            return _verdict(True, self.partial_score, "partial")

        return _verdict(False, ratio, "none")


def _verdict(is_match: bool, score: int, match_type: MatchType) -> MatchResult:
    return MatchResult(is_match=is_match, score=score, match_type=match_type)


_default_matcher = EntityMatcher()


def match(
    contact_full_name: str,
    observed_name: str,
    threshold: int = DEFAULT_THRESHOLD,
) -> MatchResult:
    """Module-level shortcut using the default tier scores."""
    return _default_matcher._compare(contact_full_name, observed_name, threshold)
