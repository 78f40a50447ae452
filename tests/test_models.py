"""Tests for Pydantic data models."""

from datetime import timezone

import pytest
from pydantic import ValidationError

from castwatch.models import Article, Contact, MatchRecord, MatchResult, Premiere
from castwatch.models.document import Credit


def test_contact_creation():
    contact = Contact(id=42, first_name=" Robert ", last_name="Downey", category="ACTOR")
    assert contact.id == "42"
    assert contact.full_name == "Robert Downey"
    assert contact.is_matchable


def test_contact_is_frozen():
    contact = Contact(id="c-1", first_name="Robert", last_name="Downey")
    with pytest.raises(ValidationError):
        contact.first_name = "Bob"


def test_contact_without_last_name_is_not_matchable():
    assert not Contact(id="c-7", first_name="Cher").is_matchable
    assert not Contact(id="c-8", first_name="  ", last_name="Smith").is_matchable


def test_contact_rejects_unknown_category():
    with pytest.raises(ValidationError):
        Contact(id="c-1", first_name="A", last_name="B", category="MUSICIAN")


def test_match_result_literal():
    with pytest.raises(ValidationError):
        MatchResult(is_match=True, score=50, match_type="soundex")


def test_article_keys():
    article = Article(url="http://www.Variety.com/2024/news/story/?utm_source=rss#top", title="T")
    assert article.document_key == "https://www.variety.com/2024/news/story"
    assert article.source == "variety"
    assert Article(url="https://example.com/a", title="T", publication="indiewire").source == "indiewire"


def test_premiere_credits_order():
    premiere = Premiere(
        id=550,
        title="Iron Legacy",
        media_type="movie",
        cast=[Credit(name="A One", character="X")],
        crew=[Credit(name="B Two", job="Director")],
    )
    assert premiere.document_key == "movie-550"
    assert [c.name for c in premiere.credits] == ["A One", "B Two"]


def test_premiere_rejects_unknown_media_type():
    with pytest.raises(ValidationError):
        Premiere(id=1, title="T", media_type="podcast")


def test_match_record_defaults():
    record = MatchRecord(
        document_key="tv-1399",
        contact_id=4,
        contact_name="Emma Stone",
        document_title="Quiet Harbor",
        source="tv",
        match_location="credit",
    )
    assert record.contact_id == "4"
    assert record.record_id == "tv-1399-4"
    assert record.match_type == "exact"
    assert record.is_new and not record.is_read
    assert record.found_at.tzinfo is timezone.utc
