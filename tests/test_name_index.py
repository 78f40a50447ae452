"""Tests for last-name and first-name-variant indices."""

from castwatch.models.name_index import NameIndex


def test_last_name_index_keys(last_name_index):
    assert set(last_name_index) == {"downey", "lawrence", "nolan", "stone", "thompson", "smith"}
    assert [c.id for c in last_name_index["nolan"]] == ["c-3"]


def test_unmatchable_contacts_are_excluded(last_name_index, variant_index):
    assert last_name_index.contact_count == 6
    assert "cher" not in variant_index


def test_variant_index_files_under_nicknames(variant_index):
    assert [c.id for c in variant_index["bob"]] == ["c-1"]
    assert [c.id for c in variant_index["robert"]] == ["c-1"]
    assert [c.id for c in variant_index["chris"]] == ["c-3"]
    assert {c.id for c in variant_index["emma"]} == {"c-4", "c-5"}


def test_contact_filed_once_per_key(sample_contacts):
    index = NameIndex(sample_contacts, lambda c: ["all", "all"])
    assert len(index["all"]) == 6


def test_mapping_behaviour(last_name_index):
    assert last_name_index.get("spielberg") is None
    assert "downey" in last_name_index
    assert len(last_name_index) == 6


def test_most_common(variant_index):
    assert variant_index.most_common(1) == [("emma", 2)]


def test_empty_contacts():
    index = NameIndex.by_last_name([])
    assert len(index) == 0
    assert index.contact_count == 0


def test_last_name_keys_match_cleaned_text_tokens():
    from castwatch.models.contact import Contact
    from castwatch.utils.names import clean_token

    contacts = [
        Contact(id="c-10", first_name="Conan", last_name="O'Brien"),
        Contact(id="c-11", first_name="Catherine", last_name="Zeta-Jones"),
    ]
    index = NameIndex.by_last_name(contacts)

    assert set(index) == {"obrien", "zetajones"}
    assert clean_token("O'Brien,") in index
