"""In-session deduplication of (document, contact) findings.

A scan may see the same contact in one article's title, excerpt and body,
or in both the cast and crew of one premiere, and a re-scan sees
everything again.  :class:`SeenPairs` is the session-scoped gate that lets
exactly one finding per pair through to persistence.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable


class SeenPairs:
    """Set of ``(document_key, contact_id)`` pairs already emitted.

    ``check_and_mark`` is the call the emit path should use: it tests and
    inserts under one lock, so two workers finishing the same pair
    concurrently cannot both pass.  ``already_seen`` / ``mark_seen`` are the
    separate halves for callers that serialise themselves.

    Usage::

        seen = SeenPairs(store.existing_pairs(user_id))
        if seen.check_and_mark(article.document_key, contact.id):
            store.upsert(record)
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: set[tuple[str, str]] = {(str(d), str(c)) for d, c in pairs}
        self._lock = threading.Lock()

    def already_seen(self, document_key: str, contact_id: str) -> bool:
        with self._lock:
            return (document_key, str(contact_id)) in self._pairs

    def mark_seen(self, document_key: str, contact_id: str) -> None:
        with self._lock:
            self._pairs.add((document_key, str(contact_id)))

    def check_and_mark(self, document_key: str, contact_id: str) -> bool:
        """Mark the pair and return True if it was not seen before."""
        key = (document_key, str(contact_id))
        with self._lock:
            if key in self._pairs:
                return False
            self._pairs.add(key)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._pairs)

    def __contains__(self, pair: object) -> bool:
        with self._lock:
            return pair in self._pairs
