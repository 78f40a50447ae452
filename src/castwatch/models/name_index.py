"""Name-fragment indices over a contact collection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping

from castwatch.models.contact import Contact
from castwatch.utils.names import clean_token, name_variants

logger = logging.getLogger(__name__)


class NameIndex(Mapping[str, list[Contact]]):
    """Read-only lookup from a normalised name fragment to contacts.

    Two flavours are built from the same class:

    - **last name** -- one key per contact, its surname cleaned the same way
      as prose tokens ("O'Brien" files under "obrien").  Used to scan prose
      where any word might be a surname.
    - **first-name variant** -- a contact is filed under its own first name
      and every nickname/canonical equivalent of it.  Used to narrow
      structured credit names before the staged matcher runs.

    A contact never appears twice under one key.  Contacts without both a
    first and a last name are left out entirely.  Indices are cheap to build
    and are rebuilt for every scan session rather than kept up to date.
    """

    def __init__(
        self,
        contacts: Iterable[Contact],
        key_fn: Callable[[Contact], Iterable[str]],
        flavour: str = "custom",
    ) -> None:
        self.flavour = flavour
        self._entries: dict[str, list[Contact]] = {}
        self._contact_count = 0
        filed: set[tuple[str, str]] = set()

        for contact in contacts:
            if not contact.is_matchable:
                continue
            self._contact_count += 1
            for key in key_fn(contact):
                if (key, contact.id) in filed:
                    continue
                filed.add((key, contact.id))
                self._entries.setdefault(key, []).append(contact)

        logger.info(
            "Built %s index: %d keys over %d contacts",
            flavour,
            len(self._entries),
            self._contact_count,
        )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def by_last_name(cls, contacts: Iterable[Contact]) -> NameIndex:
        return cls(contacts, lambda c: [clean_token(c.last_name)], flavour="last-name")

    @classmethod
    def by_first_name_variants(cls, contacts: Iterable[Contact]) -> NameIndex:
        return cls(
            contacts,
            lambda c: sorted(name_variants(c.first_name)),
            flavour="first-name-variant",
        )

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> list[Contact]:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def contact_count(self) -> int:
        """Number of indexed (matchable) contacts."""
        return self._contact_count

    def most_common(self, n: int = 10) -> list[tuple[str, int]]:
        """The *n* keys shared by the most contacts, largest first."""
        counts = [(key, len(bucket)) for key, bucket in self._entries.items()]
        counts.sort(key=lambda kv: (-kv[1], kv[0]))
        return counts[:n]


def build_last_name_index(contacts: Iterable[Contact]) -> NameIndex:
    """Index *contacts* by normalised last name."""
    return NameIndex.by_last_name(contacts)


def build_first_name_variant_index(contacts: Iterable[Contact]) -> NameIndex:
    """Index *contacts* under every variant of their first name."""
    return NameIndex.by_first_name_variants(contacts)
