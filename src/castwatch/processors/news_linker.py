"""News linking -- find tracked contacts in trade-press article text."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from castwatch.config import Settings
from castwatch.models.contact import Contact, MatchResult
from castwatch.models.document import Article, MatchLocation, MatchRecord
from castwatch.models.name_index import NameIndex, build_last_name_index
from castwatch.processors.candidates import find_candidates_in_text, surname_hits
from castwatch.processors.matcher import EntityMatcher
from castwatch.utils.names import clean_token, find_excerpt

logger = logging.getLogger(__name__)

# Highest priority first; a contact is reported at the first location it appears in.
LOCATION_PRIORITY: tuple[MatchLocation, ...] = ("title", "excerpt", "content", "full")


class NewsLinker:
    """Link articles to contacts by scanning title, excerpt, body and full text.

    Each text is tokenised and intersected with the last-name index; a
    contact under a hit surname counts as found when its full name appears
    verbatim.  With ``text_nickname_matching`` on, a surname hit without a
    verbatim full name is retried through :class:`EntityMatcher` using the
    word before the surname ("Bob Downey" for contact Robert Downey).

    One :class:`MatchRecord` is produced per contact per article, at the
    highest-priority location (title > excerpt > content > full).  Dedup
    across articles and across scans is the caller's job (see
    :class:`~castwatch.processors.dedup.SeenPairs`).
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
            contacts if isinstance(contacts, NameIndex) else build_last_name_index(contacts)
        )
        self.matcher = matcher or EntityMatcher(self.settings)
        self.user_id = user_id

        top = ", ".join(f"{name!r}: {count}" for name, count in self.index.most_common(10))
        logger.debug("Most common last names: %s", top)

    def link_article(self, article: Article) -> list[MatchRecord]:
        """Return one record per contact found anywhere in *article*."""
        texts: dict[MatchLocation, str] = {
            "title": article.title,
            "excerpt": article.excerpt,
            "content": article.content,
            "full": article.full_text,
        }
        found: dict[str, MatchRecord] = {}

        for location in LOCATION_PRIORITY:
            text = texts[location]
            if not text or not text.strip():
                continue

            # Verbatim full-name mentions
            confirmed = find_candidates_in_text(text, self.index, self.settings.min_token_length)
            for contacts in confirmed.values():
                for contact in contacts:
                    if contact.id in found:
                        continue
                    excerpt = (
                        text
                        if location == "title"
                        else find_excerpt(text, contact.full_name, self.settings.excerpt_context)
                    )
                    found[contact.id] = self._record(
                        article, contact, location, excerpt, _EXACT
                    )

            if self.settings.text_nickname_matching:
                self._link_variants(article, location, text, found)

        records = list(found.values())
        for record in records:
            logger.info(
                "Match: %s found in %s of %r (%s)",
                record.contact_name,
                record.match_location,
                article.title,
                record.match_type,
            )
        return records

    def link_batch(self, articles: list[Article]) -> dict[str, list[MatchRecord]]:
        """Link every article; returns ``{document_key: records}`` for articles with matches."""
        results: dict[str, list[MatchRecord]] = {}
        for article in articles:
            records = self.link_article(article)
            if records:
                results.setdefault(article.document_key, []).extend(records)
        return results

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _link_variants(
        self,
        article: Article,
        location: MatchLocation,
        text: str,
        found: dict[str, MatchRecord],
    ) -> None:
        """Match surname hits whose full name is not written out verbatim."""
        hits = surname_hits(text, self.index, self.settings.min_token_length)
        for surname, contacts in hits.items():
            pending = [c for c in contacts if c.id not in found]
            if not pending:
                continue
            given_names = _words_before(text, surname)
            for contact in pending:
                last_name = contact.last_name.strip()
                for given in given_names:
                    result = self.matcher.match(contact.full_name, f"{given} {last_name}")
                    if not result.is_match:
                        continue
                    excerpt = (
                        text
                        if location == "title"
                        else find_excerpt(text, last_name, self.settings.excerpt_context)
                    )
                    found[contact.id] = self._record(article, contact, location, excerpt, result)
                    break

    def _record(
        self,
        article: Article,
        contact: Contact,
        location: MatchLocation,
        excerpt: str,
        result: MatchResult,
    ) -> MatchRecord:
        extra = {"found_at": article.published_at} if article.published_at else {}
        return MatchRecord(
            document_key=article.document_key,
            contact_id=contact.id,
            user_id=contact.user_id or self.user_id,
            contact_name=contact.full_name,
            contact_category=contact.category,
            contact_email=contact.email,
            document_title=article.title,
            document_url=article.document_key,
            source=article.source,
            match_location=location,
            excerpt=excerpt,
            match_type=result.match_type,
            match_score=result.score,
            **extra,
        )


_EXACT = MatchResult(is_match=True, score=100, match_type="exact")


def _words_before(text: str, surname: str) -> list[str]:
    """Cleaned words immediately preceding each mention of *surname*, unique."""
    tokens = [t for t in (clean_token(raw) for raw in text.split()) if t]
    words: dict[str, None] = {}
    for i in range(1, len(tokens)):
        if tokens[i] == surname:
            words.setdefault(tokens[i - 1], None)
    return list(words)
