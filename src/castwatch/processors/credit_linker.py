"""Credit linking -- match premiere cast and crew names against contacts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from castwatch.config import Settings
from castwatch.models.contact import Contact
from castwatch.models.document import Credit, MatchRecord, Premiere
from castwatch.models.name_index import NameIndex, build_first_name_variant_index
from castwatch.processors.candidates import find_candidates_for_name
from castwatch.processors.matcher import EntityMatcher

logger = logging.getLogger(__name__)


@dataclass
class CreditScanStats:
    """Pruning effectiveness for one scan."""

    credits_processed: int = 0
    credits_skipped: int = 0  # no contact shares a first-name variant
    comparisons: int = 0
    contact_count: int = 0

    @property
    def brute_force_comparisons(self) -> int:
        return self.credits_processed * self.contact_count

    @property
    def efficiency_gain(self) -> float:
        """Share of the contact x credit matrix that was never compared (0.0 - 1.0)."""
        total = self.brute_force_comparisons
        if total == 0:
            return 0.0
        return (total - self.comparisons) / total


class CreditLinker:
    """Link premieres to contacts through their cast and crew credits.

    For every credit the first name is expanded through the alias table and
    looked up in the first-name-variant index; only the contacts found there
    reach the staged :class:`EntityMatcher`.  A credit whose first name has
    no variant in common with any contact is skipped without comparison.

    A contact credited more than once on one premiere (say as director and
    writer) yields a single record, for the first credit in cast-then-crew
    order.
    """

    def __init__(
        self,
        contacts: Iterable[Contact] | NameIndex,
        settings: Settings | None = None,
        matcher: EntityMatcher | None = None,
        user_id: str | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.index = (
            contacts
            if isinstance(contacts, NameIndex)
            else build_first_name_variant_index(contacts)
        )
        self.matcher = matcher or EntityMatcher(self.settings)
        self.user_id = user_id
        self.stats = CreditScanStats(contact_count=self.index.contact_count)

    def link_credit(self, credit: Credit) -> list[tuple[Contact, int, str]]:
        """Return ``(contact, score, match_type)`` for every contact *credit* matches."""
        name = credit.name.strip()
        self.stats.credits_processed += 1
        if not name:
            self.stats.credits_skipped += 1
            return []

        candidates = find_candidates_for_name(name, self.index)
        if not candidates:
            self.stats.credits_skipped += 1
            return []

        logger.debug("%r -> checking %d potential contacts", name, len(candidates))

        matched: list[tuple[Contact, int, str]] = []
        for contact in candidates:
            result = self.matcher.match(contact.full_name, name)
            self.stats.comparisons += 1
            if result.is_match:
                matched.append((contact, result.score, result.match_type))
        return matched

    def link_premiere(self, premiere: Premiere) -> list[MatchRecord]:
        """Return one record per contact credited on *premiere*."""
        found: dict[str, MatchRecord] = {}
        for credit in premiere.credits:
            for contact, score, match_type in self.link_credit(credit):
                if contact.id in found:
                    continue
                logger.info(
                    "%s match: %s = %s in %r (%d)",
                    match_type.upper(),
                    contact.full_name,
                    credit.name,
                    premiere.title,
                    score,
                )
                found[contact.id] = MatchRecord(
                    document_key=premiere.document_key,
                    contact_id=contact.id,
                    user_id=contact.user_id or self.user_id,
                    contact_name=contact.full_name,
                    contact_category=contact.category,
                    contact_email=contact.email,
                    document_title=premiere.title,
                    source=premiere.media_type,
                    match_location="credit",
                    excerpt=f"{credit.name} ({credit.role})",
                    match_type=match_type,
                    match_score=score,
                    role=credit.role,
                )
        return list(found.values())
