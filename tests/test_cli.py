"""Tests for the click CLI."""

import csv
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from castwatch.cli import cli
from castwatch.state import MatchStore
from castwatch.utils.keys import contact_key

DOWNEY = contact_key("Robert", "Downey")
NOLAN = contact_key("Christopher", "Nolan")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def contacts_csv(tmp_path: Path) -> Path:
    path = tmp_path / "contacts.csv"
    path.write_text(
        "First Name,Last Name,Email,Category\n"
        "Robert,Downey,rdj@example.com,ACTOR\n"
        "Christopher,Nolan,,DIRECTOR\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def articles_json(tmp_path: Path) -> Path:
    path = tmp_path / "articles.json"
    path.write_text(
        json.dumps(
            [
                {
                    "url": "https://deadline.com/2024/05/nolan/",
                    "title": "Christopher Nolan Sets Next Film",
                },
                {
                    "url": "https://variety.com/2024/film/casting",
                    "title": "Marvel Casting",
                    "content": "Bob Downey Jr. joins the cast.",
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def premieres_json(tmp_path: Path) -> Path:
    path = tmp_path / "premieres.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 550,
                    "title": "Iron Legacy",
                    "media_type": "movie",
                    "cast": [{"name": "Bob Downey", "character": "Tony"}],
                    "crew": [{"name": "Chris Nolan", "job": "Director"}],
                }
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_match_command(runner: CliRunner):
    result = runner.invoke(cli, ["match", "Robert Downey", "Bob Downey"])
    assert result.exit_code == 0
    assert "nickname" in result.output
    assert "score=95" in result.output


def test_scan_news_and_export(runner, tmp_path, contacts_csv, articles_json):
    db = tmp_path / "matches.db"
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            cli,
            ["scan-news", str(articles_json), "--contacts", str(contacts_csv), "--db", str(db)],
        )
        assert result.exit_code == 0, result.output

        out = tmp_path / "matches.csv"
        result = runner.invoke(cli, ["export", str(out), "--db", str(db)])
        assert result.exit_code == 0, result.output

    store = MatchStore(db)
    assert store.count() == 2
    store.close()

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert {row["contact_name"] for row in rows} == {"Robert Downey", "Christopher Nolan"}


def test_scan_premieres(runner, tmp_path, contacts_csv, premieres_json):
    db = tmp_path / "matches.db"
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            cli,
            [
                "scan-premieres",
                str(premieres_json),
                "--contacts",
                str(contacts_csv),
                "--db",
                str(db),
                "--threshold",
                "85",
            ],
        )
        assert result.exit_code == 0, result.output

    store = MatchStore(db)
    assert store.existing_pairs() == {("movie-550", DOWNEY), ("movie-550", NOLAN)}
    store.close()


def test_mark_read(runner, tmp_path, contacts_csv, premieres_json):
    db = tmp_path / "matches.db"
    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(
            cli,
            ["scan-premieres", str(premieres_json), "-c", str(contacts_csv), "--db", str(db)],
        )
        result = runner.invoke(cli, ["mark-read", "movie-550", DOWNEY, "--db", str(db)])
        assert result.exit_code == 0, result.output

        missing = runner.invoke(cli, ["mark-read", "movie-404", DOWNEY, "--db", str(db)])
        assert missing.exit_code == 1

        listed = runner.invoke(cli, ["matches", "--unread", "--db", str(db)])
        assert listed.exit_code == 0

    store = MatchStore(db)
    assert [r.contact_id for r in store.list_matches(unread_only=True)] == [NOLAN]
    store.close()


def test_matches_empty(runner, tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["matches", "--db", str(tmp_path / "empty.db")])
    assert result.exit_code == 0
    assert "No matches found" in result.output


def test_scan_news_rejects_bad_json(runner, tmp_path, contacts_csv):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["scan-news", str(bad), "--contacts", str(contacts_csv)])
    assert result.exit_code == 1
