"""Click CLI for castwatch."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from castwatch.config import Settings

console = Console()

BANNER = """
[bold cyan]castwatch[/bold cyan] - Contact mentions in trade news and premiere credits
"""


def _load_settings() -> Settings:
    """Load settings from environment, creating dirs as needed."""
    settings = Settings()
    settings.ensure_dirs()
    return settings


def _load_contacts(path: Path, user_id: str | None):
    """Import contacts, reporting row problems; exits when nothing is usable."""
    from castwatch.importers.contacts_csv import load_contacts_csv

    result = load_contacts_csv(path, user_id=user_id)
    for error in result.errors:
        console.print(f"[red]{escape(error)}[/red]")
    for warning in result.warnings:
        console.print(f"[yellow]{escape(warning)}[/yellow]")
    if not result.contacts:
        console.print(f"[red]No valid contacts in {path}[/red]")
        sys.exit(1)
    console.print(
        f"Loaded [bold]{len(result.contacts)}[/bold] contacts"
        + (f" ({result.duplicates} duplicates skipped)" if result.duplicates else "")
    )
    return result.contacts


def _load_json_list(path: Path, model):
    """Validate a JSON array file into a list of *model* instances."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON in {path}: {escape(str(exc))}[/red]")
        sys.exit(1)
    if not isinstance(raw, list):
        console.print(f"[red]{path} must contain a JSON array[/red]")
        sys.exit(1)
    try:
        return [model.model_validate(item) for item in raw]
    except ValidationError as exc:
        console.print(f"[red]Invalid record in {path}:[/red]\n{escape(str(exc))}")
        sys.exit(1)


def _print_records(records, title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Contact", style="bold")
    table.add_column("Document")
    table.add_column("Source")
    table.add_column("Where")
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Read", justify="center")

    for record in records:
        table.add_row(
            record.contact_name,
            record.document_title,
            record.source,
            record.role or record.match_location,
            record.match_type,
            str(record.match_score),
            "✓" if record.is_read else "",
        )
    console.print(table)


def _run_session(session, scan, documents) -> None:
    from castwatch.utils.progress import log_summary

    scan(documents)
    report = session.report
    if report.new_matches:
        _print_records(report.new_matches, "New Matches")
    log_summary(
        documents=report.documents,
        new_matches=len(report.new_matches),
        duplicates=report.duplicates,
        failed=report.failed,
        by_type=report.by_type,
    )


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="castwatch")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log matcher activity.")
def cli(verbose: bool) -> None:
    """castwatch -- find your contacts in trade news and premiere credits.

    Scan articles and cast/crew lists for the people in a contact list,
    store each (document, contact) match once, and review what is new.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    console.print(BANNER)


# ---------------------------------------------------------------------------
# scan-news
# ---------------------------------------------------------------------------


@cli.command("scan-news")
@click.argument("articles_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--contacts",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Contacts CSV.",
)
@click.option("--user", "user_id", type=str, default=None, help="Owner of the contacts.")
@click.option("--db", type=click.Path(path_type=Path), default=None, help="Match database.")
@click.option("--threshold", "-t", type=int, default=None, help="Fuzzy match threshold.")
def scan_news(
    articles_json: Path,
    contacts: Path,
    user_id: str | None,
    db: Path | None,
    threshold: int | None,
) -> None:
    """Scan trade-press articles for contact mentions.

    \b
    Examples:
      castwatch scan-news articles.json --contacts contacts.csv
      castwatch scan-news articles.json -c contacts.csv --user u-1 --db matches.db
    """
    from castwatch.models.document import Article
    from castwatch.processors.scanner import ScanSession
    from castwatch.state import MatchStore

    settings = _load_settings()
    if threshold is not None:
        settings.fuzzy_threshold = threshold

    contact_list = _load_contacts(contacts, user_id)
    articles = _load_json_list(articles_json, Article)
    console.print(f"Scanning [bold]{len(articles)}[/bold] articles")

    store = MatchStore(db or settings.state_db_path)
    try:
        session = ScanSession(contact_list, settings, store=store, user_id=user_id)
        _run_session(session, session.scan_articles, articles)
    finally:
        store.close()


# ---------------------------------------------------------------------------
# scan-premieres
# ---------------------------------------------------------------------------


@cli.command("scan-premieres")
@click.argument("premieres_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--contacts",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Contacts CSV.",
)
@click.option("--user", "user_id", type=str, default=None, help="Owner of the contacts.")
@click.option("--db", type=click.Path(path_type=Path), default=None, help="Match database.")
@click.option("--threshold", "-t", type=int, default=None, help="Fuzzy match threshold.")
def scan_premieres(
    premieres_json: Path,
    contacts: Path,
    user_id: str | None,
    db: Path | None,
    threshold: int | None,
) -> None:
    """Scan premiere cast and crew credits for contacts.

    The JSON file holds premieres with their ``cast`` and ``crew`` lists
    already embedded.

    \b
    Examples:
      castwatch scan-premieres premieres.json --contacts contacts.csv
      castwatch scan-premieres premieres.json -c contacts.csv --threshold 85
    """
    from castwatch.models.document import Premiere
    from castwatch.processors.scanner import ScanSession
    from castwatch.state import MatchStore

    settings = _load_settings()
    if threshold is not None:
        settings.fuzzy_threshold = threshold

    contact_list = _load_contacts(contacts, user_id)
    premieres = _load_json_list(premieres_json, Premiere)
    console.print(f"Scanning [bold]{len(premieres)}[/bold] premieres")

    store = MatchStore(db or settings.state_db_path)
    try:
        session = ScanSession(contact_list, settings, store=store, user_id=user_id)
        _run_session(session, session.scan_premieres, premieres)
    finally:
        store.close()


# ---------------------------------------------------------------------------
# match
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", type=str)
@click.argument("observed", type=str)
@click.option("--threshold", "-t", type=int, default=None, help="Fuzzy match threshold.")
def match(name: str, observed: str, threshold: int | None) -> None:
    """Compare a contact NAME with an OBSERVED name.

    \b
    Examples:
      castwatch match "Robert Downey" "Bob Downey"
      castwatch match "Jon Smith" "John Smith" --threshold 85
    """
    from castwatch.processors.matcher import EntityMatcher

    settings = Settings()
    result = EntityMatcher(settings).match(name, observed, threshold=threshold)

    colour = "green" if result.is_match else "red"
    console.print(
        f"[{colour}]{result.match_type}[/{colour}]  "
        f"score=[bold]{result.score}[/bold]  match={result.is_match}"
    )


# ---------------------------------------------------------------------------
# matches / mark-read
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--user", "user_id", type=str, default=None, help="Only this user's matches.")
@click.option("--unread", is_flag=True, default=False, help="Only unread matches.")
@click.option("--limit", "-n", type=int, default=None, help="Maximum rows shown.")
@click.option("--db", type=click.Path(path_type=Path), default=None, help="Match database.")
def matches(user_id: str | None, unread: bool, limit: int | None, db: Path | None) -> None:
    """List stored matches, newest first."""
    from castwatch.state import MatchStore

    settings = _load_settings()
    store = MatchStore(db or settings.state_db_path)
    try:
        records = store.list_matches(user_id=user_id, unread_only=unread, limit=limit)
    finally:
        store.close()

    if not records:
        console.print("[yellow]No matches found.[/yellow]")
        return
    _print_records(records, f"Matches ({len(records)})")


@cli.command("mark-read")
@click.argument("document_key", type=str)
@click.argument("contact_id", type=str)
@click.option("--db", type=click.Path(path_type=Path), default=None, help="Match database.")
def mark_read(document_key: str, contact_id: str, db: Path | None) -> None:
    """Mark one stored match as read."""
    from castwatch.state import MatchStore

    settings = _load_settings()
    store = MatchStore(db or settings.state_db_path)
    try:
        updated = store.mark_read(document_key, contact_id)
    finally:
        store.close()

    if not updated:
        console.print(f"[red]No match for {document_key} / {contact_id}[/red]")
        sys.exit(1)
    console.print("[green]Marked as read.[/green]")


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("output_csv", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--user", "user_id", type=str, default=None, help="Only this user's matches.")
@click.option("--db", type=click.Path(path_type=Path), default=None, help="Match database.")
def export(output_csv: Path, user_id: str | None, db: Path | None) -> None:
    """Export stored matches to CSV."""
    from castwatch.exporters.csv_export import MatchCsvExporter
    from castwatch.state import MatchStore

    settings = _load_settings()
    store = MatchStore(db or settings.state_db_path)
    try:
        records = store.list_matches(user_id=user_id)
    finally:
        store.close()

    MatchCsvExporter().export(records, output_csv)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
