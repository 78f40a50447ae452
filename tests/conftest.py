"""Shared test fixtures for the castwatch test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from castwatch.config import Settings
from castwatch.models.contact import Contact
from castwatch.models.document import Article, Credit, Premiere
from castwatch.models.name_index import build_first_name_variant_index, build_last_name_index
from castwatch.state import MatchStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create a Settings instance with temp directories."""
    return Settings(
        data_dir=tmp_path / "data",
        output_dir=tmp_path / "output",
        cache_dir=tmp_path / ".cache",
        state_db_path=tmp_path / ".cache" / "matches.db",
        contacts_path=tmp_path / "data" / "contacts.csv",
    )


@pytest.fixture
def sample_contacts() -> list[Contact]:
    """A small contact list, including one contact that cannot be matched."""
    return [
        Contact(
            id="c-1",
            first_name="Robert",
            last_name="Downey",
            email="rdj@example.com",
            category="ACTOR",
        ),
        Contact(id="c-2", first_name="Jennifer", last_name="Lawrence", category="ACTOR"),
        Contact(id="c-3", first_name="Christopher", last_name="Nolan", category="DIRECTOR"),
        Contact(id="c-4", first_name="Emma", last_name="Stone", category="ACTOR"),
        Contact(id="c-5", first_name="Emma", last_name="Thompson", category="ACTOR"),
        Contact(id="c-6", first_name="Opeyemi", last_name="Smith", category="PRODUCER"),
        Contact(id="c-7", first_name="Cher", last_name=None),
    ]


@pytest.fixture
def last_name_index(sample_contacts):
    return build_last_name_index(sample_contacts)


@pytest.fixture
def variant_index(sample_contacts):
    return build_first_name_variant_index(sample_contacts)


@pytest.fixture
def store(tmp_path: Path):
    """A MatchStore on a temp database, closed after the test."""
    match_store = MatchStore(tmp_path / "matches.db")
    yield match_store
    match_store.close()


@pytest.fixture
def sample_articles() -> list[Article]:
    """Trade-press articles with mentions in different locations."""
    return [
        Article(
            url="https://deadline.com/2024/05/christopher-nolan-next-film/?ref=rss",
            title="Christopher Nolan Sets Next Film at Universal",
            excerpt="The director returns with an original event movie.",
            content="Christopher Nolan will write and direct. Emma Stone is in talks to star.",
            published_at=datetime(2024, 5, 2, 14, 0, tzinfo=timezone.utc),
        ),
        Article(
            url="https://variety.com/2024/film/news/marvel-casting/",
            title="Marvel Rounds Out Ensemble",
            content="Bob Downey Jr. joins the cast alongside newcomers.",
            published_at=datetime(2024, 5, 3, 9, 30, tzinfo=timezone.utc),
        ),
        Article(
            url="https://www.hollywoodreporter.com/business/box-office",
            title="Weekend Box Office Report",
            content="Holdovers dominated a quiet frame with no new wide releases.",
        ),
    ]


@pytest.fixture
def sample_premieres() -> list[Premiere]:
    """Premieres with embedded cast and crew."""
    return [
        Premiere(
            id=550,
            title="Iron Legacy",
            media_type="movie",
            release_date="2024-06-14",
            cast=[
                Credit(name="Bob Downey", character="Tony"),
                Credit(name="Zelda Williams", character="Pepper"),
            ],
            crew=[
                Credit(name="Christopher Nolan", job="Director", department="Directing"),
                Credit(name="Chris Nolan", job="Writer", department="Writing"),
            ],
        ),
        Premiere(
            id=1399,
            title="Quiet Harbor",
            media_type="tv",
            cast=[Credit(name="Emma Stone", character="Ruth")],
        ),
    ]
