"""Match record store backed by SQLite.

Persists :class:`MatchRecord` rows with at most one row per
``(document_key, contact_id)``: every write is an upsert on exactly that
pair, so rediscovering a match -- later in the same scan or in a re-scan --
updates the existing row instead of adding another.

The database is stored at ``.cache/matches.db`` by default.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from castwatch.models.document import MatchRecord

_SCHEMA = """
CREATE TABLE IF NOT EXISTS matches (
    document_key     TEXT NOT NULL,
    contact_id       TEXT NOT NULL,
    user_id          TEXT,
    contact_name     TEXT NOT NULL,
    contact_category TEXT NOT NULL DEFAULT 'OTHER',
    contact_email    TEXT,
    document_title   TEXT NOT NULL,
    document_url     TEXT,
    source           TEXT NOT NULL,
    match_location   TEXT NOT NULL,
    excerpt          TEXT NOT NULL DEFAULT '',
    match_type       TEXT NOT NULL,
    match_score      INTEGER NOT NULL,
    role             TEXT,
    found_at         TEXT NOT NULL,
    is_new           INTEGER NOT NULL DEFAULT 1,
    is_read          INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (document_key, contact_id)
);

CREATE INDEX IF NOT EXISTS idx_matches_user     ON matches(user_id);
CREATE INDEX IF NOT EXISTS idx_matches_found_at ON matches(found_at DESC);
CREATE INDEX IF NOT EXISTS idx_matches_is_read  ON matches(is_read);
"""

_COLUMNS = (
    "document_key",
    "contact_id",
    "user_id",
    "contact_name",
    "contact_category",
    "contact_email",
    "document_title",
    "document_url",
    "source",
    "match_location",
    "excerpt",
    "match_type",
    "match_score",
    "role",
    "found_at",
    "is_new",
    "is_read",
)

# Columns refreshed when a pair is rediscovered.  found_at and is_read keep
# their first values so a re-scan does not resurface an already-read alert.
_UPDATED_ON_CONFLICT = (
    "user_id",
    "contact_name",
    "contact_category",
    "contact_email",
    "document_title",
    "document_url",
    "source",
    "match_location",
    "excerpt",
    "match_type",
    "match_score",
    "role",
)

_UPSERT = f"""
INSERT INTO matches ({", ".join(_COLUMNS)})
VALUES ({", ".join("?" * len(_COLUMNS))})
ON CONFLICT (document_key, contact_id) DO UPDATE SET
    {", ".join(f"{col} = excluded.{col}" for col in _UPDATED_ON_CONFLICT)}
"""


class MatchStore:
    """Persist match records, one row per (document, contact).

    Usage::

        store = MatchStore(Path(".cache/matches.db"))
        created = store.upsert(record)   # True only for a brand-new pair
        for record in store.list_matches(user_id="u-1", unread_only=True):
            ...
        store.close()
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or Path(".cache/matches.db")
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def upsert(self, record: MatchRecord) -> bool:
        """Insert *record* or update the existing row for its pair.

        Returns True if the pair was not stored before.
        """
        existed = self.exists(record.document_key, record.contact_id)
        self._conn.execute(_UPSERT, self._to_row(record))
        self._conn.commit()
        return not existed

    def exists(self, document_key: str, contact_id: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM matches WHERE document_key = ? AND contact_id = ?",
            (document_key, str(contact_id)),
        ).fetchone()
        return row is not None

    def get(self, document_key: str, contact_id: str) -> MatchRecord | None:
        row = self._conn.execute(
            "SELECT * FROM matches WHERE document_key = ? AND contact_id = ?",
            (document_key, str(contact_id)),
        ).fetchone()
        return self._from_row(row) if row else None

    def existing_pairs(self, user_id: str | None = None) -> set[tuple[str, str]]:
        """All stored ``(document_key, contact_id)`` pairs, optionally for one user."""
        if user_id is None:
            rows = self._conn.execute("SELECT document_key, contact_id FROM matches").fetchall()
        else:
            rows = self._conn.execute(
                "SELECT document_key, contact_id FROM matches WHERE user_id = ?",
                (user_id,),
            ).fetchall()
        return {(row[0], row[1]) for row in rows}

    def list_matches(
        self,
        user_id: str | None = None,
        unread_only: bool = False,
        limit: int | None = None,
    ) -> list[MatchRecord]:
        """Stored records, newest first."""
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id = ?")
            params.append(user_id)
        if unread_only:
            clauses.append("is_read = 0")

        sql = "SELECT * FROM matches"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY found_at DESC, document_key, contact_id"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        return [self._from_row(row) for row in self._conn.execute(sql, params).fetchall()]

    def mark_read(self, document_key: str, contact_id: str) -> bool:
        """Flag one match as read.  Returns False if the pair is unknown."""
        cursor = self._conn.execute(
            "UPDATE matches SET is_read = 1, is_new = 0"
            " WHERE document_key = ? AND contact_id = ?",
            (document_key, str(contact_id)),
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def count(self, user_id: str | None = None) -> int:
        if user_id is None:
            row = self._conn.execute("SELECT COUNT(*) FROM matches").fetchone()
        else:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM matches WHERE user_id = ?", (user_id,)
            ).fetchone()
        return row[0]

    def get_stats(self) -> dict[str, int]:
        """Counts of stored matches per match type."""
        rows = self._conn.execute(
            "SELECT match_type, COUNT(*) FROM matches GROUP BY match_type"
        ).fetchall()
        return {row[0]: row[1] for row in rows}

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_row(record: MatchRecord) -> tuple[object, ...]:
        data = record.model_dump()
        data["found_at"] = record.found_at.isoformat()
        data["is_new"] = int(record.is_new)
        data["is_read"] = int(record.is_read)
        return tuple(data[col] for col in _COLUMNS)

    @staticmethod
    def _from_row(row: sqlite3.Row) -> MatchRecord:
        data = dict(row)
        data["found_at"] = datetime.fromisoformat(data["found_at"])
        data["is_new"] = bool(data["is_new"])
        data["is_read"] = bool(data["is_read"])
        return MatchRecord.model_validate(data)
