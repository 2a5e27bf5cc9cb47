"""PDF text extraction for uploaded legal documents.

Pages are read in order. The text runs of a page are joined with a single
space and every page is terminated by a newline, so a three page document
with page texts ``P1``, ``P2``, ``P3`` extracts to ``"P1\\nP2\\nP3\\n"``.

The MIME type and size of an upload are checked before this module is
reached; here we only deal with bytes that claim to be a PDF.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from pypdf import PasswordType, PdfReader
from pypdf.errors import FileNotDecryptedError

from orchestrator.exceptions import ExtractionError

logger = logging.getLogger("justiceally.tools.pdf_extract")

UNREADABLE_PDF_MESSAGE = "We could not read this file. Try another PDF or paste the text instead."


def _page_runs(page: Any) -> list[str]:
    """Collect the text runs of one page, one entry per visual line fragment."""
    fragments: list[str] = []

    def visit(text: str, *_: Any) -> None:
        fragments.append(text)

    page.extract_text(visitor_text=visit)

    runs: list[str] = []
    for fragment in fragments:
        for line in fragment.splitlines():
            line = line.strip()
            if line:
                runs.append(line)
    return runs


def extract_text(data: bytes) -> str:
    """Extract the text layer of a PDF.

    Args:
        data: Raw PDF bytes.

    Returns:
        Page-ordered text, runs joined by spaces, one newline per page. May be
        empty when the PDF has no text layer (scanned images); callers decide
        whether that is acceptable.

    Raises:
        ExtractionError: If the bytes cannot be parsed or the file is encrypted.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        # Owner-password-only files open with an empty user password.
        if reader.is_encrypted and reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            raise ExtractionError(
                "This PDF is password protected. Remove the protection or paste the text instead.",
                {"reason": "encrypted"},
            )

        pages: list[str] = []
        for number, page in enumerate(reader.pages, start=1):
            runs = _page_runs(page)
            logger.debug(f"Page {number}: {len(runs)} text runs")
            pages.append(" ".join(runs) + "\n")
    except ExtractionError:
        raise
    except FileNotDecryptedError as exc:
        raise ExtractionError(
            "This PDF is password protected. Remove the protection or paste the text instead.",
            {"reason": "encrypted"},
        ) from exc
    except Exception as exc:
        logger.warning(f"Could not parse PDF ({len(data)} bytes): {exc}")
        raise ExtractionError(
            UNREADABLE_PDF_MESSAGE,
            {"reason": "unreadable", "error_type": type(exc).__name__},
        ) from exc

    logger.info(f"Extracted {sum(len(p) for p in pages)} chars from {len(pages)} pages")
    return "".join(pages)
