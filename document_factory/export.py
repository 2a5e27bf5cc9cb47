"""Plain-text download helpers."""

from __future__ import annotations

import re
import unicodedata

DEFAULT_FILENAME = "document"
SIMPLIFIED_TITLE = "Simplified Document"

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """``"RTI Application"`` -> ``"rti-application"``."""
    ascii_title = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_SLUG.sub("-", ascii_title.lower()).strip("-")
    return slug or DEFAULT_FILENAME


def download_filename(title: str) -> str:
    return f"{slugify(title)}.txt"
