"""Scan sessions -- one user's pass over a batch of articles or premieres.

A session builds the name indices once from the user's current contacts,
runs the linkers, and pushes each finding through a single emit path:

    check-seen -> mark -> upsert -> broadcast

Credit fetches may run on a small thread pool, but matching and the emit
path always run on the calling thread, in input order.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property

from castwatch.config import Settings
from castwatch.models.contact import Contact
from castwatch.models.document import Article, MatchRecord, Premiere
from castwatch.models.name_index import (
    NameIndex,
    build_first_name_variant_index,
    build_last_name_index,
)
from castwatch.processors.credit_linker import CreditLinker
from castwatch.processors.dedup import SeenPairs
from castwatch.processors.matcher import EntityMatcher
from castwatch.processors.news_linker import NewsLinker
from castwatch.state import MatchStore
from castwatch.utils.parallel import run_parallel

logger = logging.getLogger(__name__)

MatchCallback = Callable[[MatchRecord], None]
CreditFetcher = Callable[[Premiere], Premiere]


@dataclass
class ScanReport:
    """What one session emitted."""

    documents: int = 0
    new_matches: list[MatchRecord] = field(default_factory=list)
    duplicates: int = 0
    failed: int = 0

    @property
    def by_type(self) -> dict[str, int]:
        return dict(Counter(r.match_type for r in self.new_matches))


class ScanSession:
    """Scan documents for one user's contacts, emitting each pair at most once.

    Parameters
    ----------
    contacts:
        The user's contacts.  Contacts without both names are ignored.
    settings:
        Matcher and scan configuration.
    store:
        Persistence sink.  When given, every new finding is upserted on
        ``(document_key, contact_id)``.
    on_match:
        Optional broadcast hook called after a successful upsert.  Its
        failures are logged and never undo the upsert.
    user_id:
        Owner of the scan; stamped on records and used to seed dedup.
    resume:
        Seed the dedup set with pairs already in *store* for *user_id*, so
        a re-scan emits nothing for matches recorded earlier.
    """

    def __init__(
        self,
        contacts: Iterable[Contact],
        settings: Settings | None = None,
        store: MatchStore | None = None,
        on_match: MatchCallback | None = None,
        user_id: str | None = None,
        resume: bool = True,
    ) -> None:
        self.contacts = list(contacts)
        self.settings = settings or Settings()
        self.store = store
        self.on_match = on_match
        self.user_id = user_id
        self.matcher = EntityMatcher(self.settings)
        self.report = ScanReport()

        existing = store.existing_pairs(user_id) if store is not None and resume else set()
        self.seen = SeenPairs(existing)
        logger.info(
            "Scan session for user %s: %d contacts, %d pairs already recorded",
            user_id,
            len(self.contacts),
            len(existing),
        )

    # ------------------------------------------------------------------
    # Indices (built once per session)
    # ------------------------------------------------------------------

    @cached_property
    def last_name_index(self) -> NameIndex:
        return build_last_name_index(self.contacts)

    @cached_property
    def first_name_variant_index(self) -> NameIndex:
        return build_first_name_variant_index(self.contacts)

    @cached_property
    def news_linker(self) -> NewsLinker:
        return NewsLinker(self.last_name_index, self.settings, self.matcher, self.user_id)

    @cached_property
    def credit_linker(self) -> CreditLinker:
        return CreditLinker(
            self.first_name_variant_index, self.settings, self.matcher, self.user_id
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scan_articles(self, articles: Iterable[Article]) -> list[MatchRecord]:
        """Scan articles; returns the records newly emitted by this call."""
        emitted: list[MatchRecord] = []
        for article in articles:
            self.report.documents += 1
            for record in self.news_linker.link_article(article):
                if self.emit(record):
                    emitted.append(record)
        return emitted

    def scan_premieres(
        self,
        premieres: Iterable[Premiere],
        fetch_credits: CreditFetcher | None = None,
        show_progress: bool = False,
    ) -> list[MatchRecord]:
        """Scan premieres' credits; returns the records newly emitted by this call.

        With *fetch_credits*, each premiere is first passed to it (on up to
        ``settings.max_workers`` threads) to obtain a copy carrying its cast
        and crew.  Premieres whose fetch fails are skipped.
        """
        premieres = list(premieres)
        if fetch_credits is not None:
            fetched = run_parallel(
                fetch_credits,
                premieres,
                max_workers=self.settings.max_workers,
                label="Fetching credits",
                show_progress=show_progress,
            )
            premieres = [with_credits for _, with_credits in fetched]

        emitted: list[MatchRecord] = []
        for premiere in premieres:
            self.report.documents += 1
            if not premiere.credits:
                logger.info("No credits available for %r, skipping", premiere.title)
                continue
            for record in self.credit_linker.link_premiere(premiere):
                if self.emit(record):
                    emitted.append(record)

        stats = self.credit_linker.stats
        logger.info(
            "Credits: %d processed, %d skipped, %d comparisons (%.1f%% of brute force avoided)",
            stats.credits_processed,
            stats.credits_skipped,
            stats.comparisons,
            stats.efficiency_gain * 100,
        )
        return emitted

    def emit(self, record: MatchRecord) -> bool:
        """Persist and broadcast *record* unless its pair was already emitted."""
        if not self.seen.check_and_mark(record.document_key, record.contact_id):
            self.report.duplicates += 1
            return False

        if self.store is not None:
            try:
                self.store.upsert(record)
            except sqlite3.Error as exc:
                logger.error("Failed to save match %s: %s", record.record_id, exc)
                self.report.failed += 1
                return False

        self.report.new_matches.append(record)

        if self.on_match is not None:
            try:
                self.on_match(record)
            except Exception as exc:
                logger.warning("Broadcast failed for %s (saved): %s", record.record_id, exc)
        return True
