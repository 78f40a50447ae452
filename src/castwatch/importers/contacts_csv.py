"""Import a user's contacts from a CSV export.

Accepts the column spellings produced by the common address-book exporters::

    First Name / firstName
    Last Name  / lastName
    Email / E-mail Address / email
    Category / category
    id                                  (optional; derived from the name when absent)

Rows are validated one at a time.  Problems are collected on the returned
:class:`ImportResult` so one bad row never sinks the whole file.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from castwatch.models.contact import CONTACT_CATEGORIES, Contact
from castwatch.utils.keys import contact_key
from castwatch.utils.names import normalize

logger = logging.getLogger(__name__)

_FIRST_NAME_COLUMNS = ("First Name", "firstName")
_LAST_NAME_COLUMNS = ("Last Name", "lastName")
_EMAIL_COLUMNS = ("Email", "E-mail Address", "email")
_CATEGORY_COLUMNS = ("Category", "category")
_ID_COLUMNS = ("id", "ID", "Id")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class ImportResult:
    """Contacts accepted from one file plus everything that was rejected."""

    contacts: list[Contact] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    duplicates: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


def _pick(row: dict[str, str | None], columns: tuple[str, ...]) -> str:
    """First non-blank value among *columns*, stripped."""
    for column in columns:
        value = row.get(column)
        if value and value.strip():
            return value.strip()
    return ""


def load_contacts_csv(path: Path | str, user_id: str | None = None) -> ImportResult:
    """Load and validate contacts from *path*.

    Parameters
    ----------
    path:
        CSV file with a header row.  A missing file raises
        ``FileNotFoundError``.
    user_id:
        Owner stamped on every imported contact.

    Returns
    -------
    ImportResult
        Valid contacts in file order.  Row numbers in messages are 1-based
        data rows (the header is not counted).
    """
    path = Path(path)
    result = ImportResult()
    seen_names: set[str] = set()

    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for row_number, row in enumerate(reader, start=1):
            first_name = _pick(row, _FIRST_NAME_COLUMNS)
            last_name = _pick(row, _LAST_NAME_COLUMNS)
            email = _pick(row, _EMAIL_COLUMNS)
            category = _pick(row, _CATEGORY_COLUMNS).upper()

            if not first_name or not last_name:
                result.errors.append(f"Row {row_number}: Missing first or last name")
                continue

            if email and not _EMAIL_RE.match(email):
                result.errors.append(f"Row {row_number}: Invalid email format ({email})")
                continue

            if not category:
                category = "OTHER"
            elif category not in CONTACT_CATEGORIES:
                result.warnings.append(
                    f"Row {row_number}: Invalid category {category!r}, using OTHER"
                )
                category = "OTHER"

            normalized_name = normalize(f"{first_name} {last_name}")
            if normalized_name in seen_names:
                result.duplicates += 1
                continue
            seen_names.add(normalized_name)

            contact_id = _pick(row, _ID_COLUMNS) or contact_key(first_name, last_name)
            result.contacts.append(
                Contact(
                    id=contact_id,
                    first_name=first_name,
                    last_name=last_name,
                    email=email or None,
                    category=category,
                    user_id=user_id,
                )
            )

    logger.info(
        "Imported %d contacts from %s (%d errors, %d warnings, %d duplicates)",
        len(result.contacts),
        path,
        len(result.errors),
        len(result.warnings),
        result.duplicates,
    )
    return result
