"""Tests for the contacts CSV importer."""

from pathlib import Path

import pytest

from castwatch.importers.contacts_csv import load_contacts_csv
from castwatch.utils.keys import contact_key


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_import_validates_rows(tmp_path: Path):
    csv_path = _write(
        tmp_path / "contacts.csv",
        "First Name,Last Name,Email,Category\n"
        "Robert,Downey,rdj@example.com,actor\n"
        "Jennifer,,jl@example.com,ACTOR\n"
        "Christopher,Nolan,not-an-email,DIRECTOR\n"
        "Emma,Stone,,MUSICIAN\n"
        "robert,DOWNEY,,ACTOR\n",
    )
    result = load_contacts_csv(csv_path, user_id="u-1")

    assert [c.full_name for c in result.contacts] == ["Robert Downey", "Emma Stone"]
    assert result.errors == [
        "Row 2: Missing first or last name",
        "Row 3: Invalid email format (not-an-email)",
    ]
    assert len(result.warnings) == 1
    assert "Row 4" in result.warnings[0]
    assert result.duplicates == 1
    assert not result.ok

    downey, stone = result.contacts
    assert downey.id == contact_key("Robert", "Downey")
    assert stone.id == contact_key("emma", " STONE")
    assert downey.category == "ACTOR"
    assert downey.email == "rdj@example.com"
    assert downey.user_id == "u-1"
    assert stone.category == "OTHER"
    assert stone.email is None


def test_import_alternate_headers_and_ids(tmp_path: Path):
    csv_path = _write(
        tmp_path / "export.csv",
        "id,firstName,lastName,E-mail Address,category\n"
        "501,Jennifer,Lawrence,jl@example.com,\n"
        "502,Christopher,Nolan,,director\n",
    )
    result = load_contacts_csv(csv_path)

    assert result.ok
    assert [c.id for c in result.contacts] == ["501", "502"]
    assert result.contacts[0].email == "jl@example.com"
    assert result.contacts[0].category == "OTHER"
    assert result.contacts[1].category == "DIRECTOR"
    assert result.warnings == []


def test_import_handles_byte_order_mark(tmp_path: Path):
    csv_path = tmp_path / "bom.csv"
    csv_path.write_bytes("First Name,Last Name\nEmma,Thompson\n".encode("utf-8-sig"))

    result = load_contacts_csv(csv_path)
    assert [c.full_name for c in result.contacts] == ["Emma Thompson"]


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_contacts_csv(tmp_path / "nope.csv")


def test_ids_survive_reimport_after_row_removed(tmp_path: Path):
    csv_path = _write(
        tmp_path / "contacts.csv",
        "First Name,Last Name\nRobert,Downey\nEmma,Stone\n",
    )
    before = {c.full_name: c.id for c in load_contacts_csv(csv_path).contacts}

    _write(csv_path, "First Name,Last Name\nEmma,Stone\n")
    after = {c.full_name: c.id for c in load_contacts_csv(csv_path).contacts}

    assert after["Emma Stone"] == before["Emma Stone"]
    assert before["Emma Stone"] != before["Robert Downey"]


def test_reimported_contact_keeps_stored_matches(tmp_path: Path, settings):
    from castwatch.models.document import Article
    from castwatch.processors.scanner import ScanSession
    from castwatch.state import MatchStore

    csv_path = _write(
        tmp_path / "contacts.csv",
        "First Name,Last Name\nRobert,Downey\nEmma,Stone\n",
    )
    article = Article(url="https://variety.com/a", title="Robert Downey and Emma Stone team up")
    store = MatchStore(tmp_path / "matches.db")

    ScanSession(load_contacts_csv(csv_path).contacts, settings, store=store).scan_articles([article])

    _write(csv_path, "First Name,Last Name\nEmma,Stone\n")
    rescan = ScanSession(load_contacts_csv(csv_path).contacts, settings, store=store)
    assert rescan.scan_articles([article]) == []

    names = {r.contact_id: r.contact_name for r in store.list_matches()}
    store.close()
    assert sorted(names.values()) == ["Emma Stone", "Robert Downey"]
    assert names[contact_key("Emma", "Stone")] == "Emma Stone"
