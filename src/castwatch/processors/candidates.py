"""Candidate pruning -- narrow the contact list before any expensive comparison.

Free text is intersected with the last-name index token by token, then
confirmed with a plain substring test on the contact's full name.  Structured
credit names are looked up by every variant of their first token in the
first-name-variant index.  Either way, contacts that share no name fragment
with the document are never compared.
"""

from __future__ import annotations

from castwatch.models.contact import Contact
from castwatch.models.name_index import NameIndex
from castwatch.utils.names import clean_token, name_variants, split_name


def text_tokens(text: str, min_token_length: int = 2) -> list[str]:
    """Unique cleaned tokens of *text* in first-seen order.

    Tokens shorter than *min_token_length* after cleaning are dropped; they
    collide with too many surnames by accident.
    """
    seen: dict[str, None] = {}
    for raw in text.split():
        token = clean_token(raw)
        if len(token) >= min_token_length:
            seen.setdefault(token, None)
    return list(seen)


def surname_hits(
    text: str,
    last_name_index: NameIndex,
    min_token_length: int = 2,
) -> dict[str, list[Contact]]:
    """Every surname in the index that occurs as a token of *text*."""
    if not text:
        return {}
    return {
        token: last_name_index[token]
        for token in text_tokens(text, min_token_length)
        if token in last_name_index
    }


def find_candidates_in_text(
    text: str,
    last_name_index: NameIndex,
    min_token_length: int = 2,
) -> dict[str, list[Contact]]:
    """Contacts whose full name literally appears in *text*, grouped by surname.

    Only surnames with at least one confirmed contact are returned.
    """
    hits = surname_hits(text, last_name_index, min_token_length)
    if not hits:
        return {}

    text_lower = text.lower()
    confirmed: dict[str, list[Contact]] = {}
    for surname, contacts in hits.items():
        found = [c for c in contacts if c.full_name.lower() in text_lower]
        if found:
            confirmed[surname] = found
    return confirmed


def find_candidates_for_name(
    observed_name: str,
    first_name_variant_index: NameIndex,
) -> list[Contact]:
    """Contacts sharing any first-name variant with *observed_name*.

    The first whitespace-delimited token of the observed name is expanded
    through the alias table and each variant looked up; the union is
    returned without duplicates, in first-seen order.
    """
    parts = split_name(observed_name)
    if not parts:
        return []

    candidates: dict[str, Contact] = {}
    for variant in sorted(name_variants(parts[0])):
        for contact in first_name_variant_index.get(variant, ()):
            candidates.setdefault(contact.id, contact)
    return list(candidates.values())
