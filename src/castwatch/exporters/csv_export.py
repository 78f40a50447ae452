"""CSV exporter for stored match records."""

from __future__ import annotations

import csv
from pathlib import Path

from rich.console import Console

from castwatch.models.document import MatchRecord

# Column definitions for the CSV export.
_CSV_COLUMNS = [
    "found_at",
    "contact_name",
    "contact_category",
    "contact_email",
    "document_title",
    "document_url",
    "source",
    "match_location",
    "match_type",
    "match_score",
    "role",
    "excerpt",
    "is_read",
    "document_key",
    "contact_id",
]


class MatchCsvExporter:
    """Export match records to CSV format."""

    def __init__(self) -> None:
        self._console = Console()

    def export(self, records: list[MatchRecord], output_path: Path) -> Path:
        """Export match records to a CSV file.

        Parameters
        ----------
        records:
            Match records to export, written in the given order.
        output_path:
            Full path for the output CSV file.  Parent directories are
            created automatically if they do not exist.

        Returns
        -------
        Path
            The path to the written CSV file.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=_CSV_COLUMNS,
                extrasaction="ignore",
                quoting=csv.QUOTE_MINIMAL,
            )
            writer.writeheader()

            for record in records:
                writer.writerow(self._record_to_row(record))

        size_kb = output_path.stat().st_size / 1024
        self._console.print(
            f"[green]Exported {len(records):,} matches to "
            f"{output_path.resolve()} ({size_kb:.1f} KB)[/green]"
        )
        return output_path

    @staticmethod
    def _record_to_row(record: MatchRecord) -> dict[str, str]:
        return {
            "found_at": record.found_at.isoformat(),
            "contact_name": record.contact_name,
            "contact_category": record.contact_category,
            "contact_email": record.contact_email or "",
            "document_title": record.document_title,
            "document_url": record.document_url or "",
            "source": record.source,
            "match_location": record.match_location,
            "match_type": record.match_type,
            "match_score": str(record.match_score),
            "role": record.role or "",
            "excerpt": record.excerpt,
            "is_read": "yes" if record.is_read else "no",
            "document_key": record.document_key,
            "contact_id": record.contact_id,
        }
