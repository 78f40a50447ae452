"""Stable keys: URL normalisation, premiere credit keys and contact ids."""

from __future__ import annotations

import hashlib
from urllib.parse import urlsplit, urlunsplit

from castwatch.utils.names import normalize

_PUBLICATION_HOSTS = {
    "deadline.com": "deadline",
    "variety.com": "variety",
    "hollywoodreporter.com": "thr",
}


def normalize_url(url: str) -> str:
    """Canonicalise an article URL so the same story always keys the same.

    Forces ``https``, drops query string and fragment, and removes a
    trailing slash from the path.  Strings that do not parse as an absolute
    URL are returned unchanged.
    """
    parts = urlsplit(url.strip())
    if not parts.scheme or not parts.netloc:
        return url

    path = parts.path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return urlunsplit(("https", parts.netloc.lower(), path, "", ""))


def publication_from_url(url: str) -> str:
    """Map an article URL to its trade publication slug, or ``"other"``."""
    host = urlsplit(url).netloc.lower()
    for domain, slug in _PUBLICATION_HOSTS.items():
        if host == domain or host.endswith("." + domain):
            return slug
    return "other"


def credit_key(media_type: str, premiere_id: int | str) -> str:
    """Document key for a premiere, e.g. ``"movie-550"``."""
    return f"{media_type}-{premiere_id}"


def record_id(document_key: str, contact_id: str) -> str:
    """Identifier shared by every representation of one (document, contact) match."""
    return f"{document_key}-{contact_id}"


def contact_key(first_name: str, last_name: str) -> str:
    """Stable contact id derived from the normalised full name.

    Used when an import carries no id column, so re-importing an edited
    file keeps every remaining contact's id.
    """
    name = f"{normalize(first_name)} {normalize(last_name)}"
    return "c-" + hashlib.sha1(name.encode("utf-8")).hexdigest()[:12]
