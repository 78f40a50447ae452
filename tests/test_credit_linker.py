"""Tests for linking premiere credits to contacts."""

from castwatch.models.document import Credit
from castwatch.processors.credit_linker import CreditLinker


def test_link_premiere(sample_contacts, sample_premieres):
    linker = CreditLinker(sample_contacts)
    records = {r.contact_id: r for r in linker.link_premiere(sample_premieres[0])}

    assert set(records) == {"c-1", "c-3"}

    downey = records["c-1"]
    assert downey.match_type == "nickname"
    assert downey.match_score == 95
    assert downey.role == "Actor as Tony"
    assert downey.excerpt == "Bob Downey (Actor as Tony)"
    assert downey.match_location == "credit"
    assert downey.source == "movie"
    assert downey.document_key == "movie-550"


def test_first_credit_wins_for_repeat_contact(sample_contacts, sample_premieres):
    records = CreditLinker(sample_contacts).link_premiere(sample_premieres[0])
    nolan = [r for r in records if r.contact_id == "c-3"]

    assert len(nolan) == 1
    assert nolan[0].role == "Director"
    assert nolan[0].match_type == "exact"


def test_shared_first_name_matches_right_contact(sample_contacts, sample_premieres):
    records = CreditLinker(sample_contacts).link_premiere(sample_premieres[1])
    assert [r.contact_id for r in records] == ["c-4"]
    assert records[0].document_key == "tv-1399"


def test_unknown_first_name_is_skipped(sample_contacts):
    linker = CreditLinker(sample_contacts)
    assert linker.link_credit(Credit(name="Zelda Williams", character="Pepper")) == []
    assert linker.link_credit(Credit(name="  ", job="Grip")) == []
    assert linker.stats.credits_skipped == 2
    assert linker.stats.comparisons == 0


def test_pruning_stats(sample_contacts, sample_premieres):
    linker = CreditLinker(sample_contacts)
    linker.link_premiere(sample_premieres[0])

    stats = linker.stats
    assert stats.credits_processed == 4
    assert stats.credits_skipped == 1
    assert stats.comparisons == 3
    assert stats.contact_count == 6
    assert stats.brute_force_comparisons == 24
    assert stats.efficiency_gain == 21 / 24


def test_credit_role():
    assert Credit(name="A B", character="Ruth").role == "Actor as Ruth"
    assert Credit(name="A B", job="Editor").role == "Editor"
    assert Credit(name="A B").role == "crew member"
