"""Scan configuration using Pydantic BaseSettings with CASTWATCH_ env prefix."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Matcher and scan settings loaded from environment variables prefixed with CASTWATCH_.

    Example:
        CASTWATCH_DATA_DIR=/mnt/data
        CASTWATCH_FUZZY_THRESHOLD=92
        CASTWATCH_STATE_DB_PATH=/var/lib/castwatch/matches.db
    """

    model_config = {"env_prefix": "CASTWATCH_"}

    # ── Directory paths ──────────────────────────────────────────────────
    data_dir: Path = Path("./data")
    output_dir: Path = Path("./output")
    cache_dir: Path = Path("./.cache")
    state_db_path: Path = Path("./.cache/matches.db")
    contacts_path: Path = Path("./data/contacts.csv")

    # ── Orchestration ────────────────────────────────────────────────────
    max_workers: int = 3  # concurrent credit fetches (third-party rate limits)

    # ── Matcher tuning ───────────────────────────────────────────────────
    fuzzy_threshold: int = 90  # token-sort ratio needed for a fuzzy match
    nickname_score: int = 95
    partial_score: int = 93
    partial_min_length: int = 3  # both first names must be at least this long

    # ── Free-text scanning ───────────────────────────────────────────────
    min_token_length: int = 2  # shorter tokens are never looked up
    excerpt_context: int = 300  # characters of context around a mention
    text_nickname_matching: bool = True  # "Bob Downey" in prose -> Robert Downey

    def ensure_dirs(self) -> None:
        """Create data, output, and cache directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.state_db_path.parent.mkdir(parents=True, exist_ok=True)
