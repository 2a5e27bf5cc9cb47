"""Custom exceptions for the JusticeAlly document pipeline.

Provides a hierarchy of exceptions for better error handling and reporting.
"""

from __future__ import annotations

from typing import Any


class JusticeAllyError(Exception):
    """Base exception for all JusticeAlly errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for JSON responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(JusticeAllyError):
    """Raised when user input is incomplete or malformed.

    Used for missing required fields and blank pasted text.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        missing_fields: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.missing_fields = list(missing_fields or [])
        if field:
            self.details["field"] = field
        if self.missing_fields:
            self.details["missing_fields"] = self.missing_fields


class ExtractionError(JusticeAllyError):
    """Raised when an uploaded document cannot be turned into text."""


class UnsupportedMediaTypeError(ExtractionError):
    """Raised when an upload is not a PDF."""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            "Please upload a PDF file",
            {"content_type": content_type or "unknown"},
        )
        self.content_type = content_type


class UploadTooLargeError(ExtractionError):
    """Raised when an upload exceeds the configured size ceiling."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"File is too large ({size} bytes). Maximum size: {max_size // (1024 * 1024)}MB",
            {"size": size, "max_size": max_size},
        )
        self.size = size
        self.max_size = max_size


class EmptyDocumentError(ExtractionError):
    """Raised when a PDF parses but carries no text layer (e.g. scanned images)."""

    def __init__(self) -> None:
        super().__init__(
            "No readable text was found in this file. "
            "It may be a scanned image; paste the text instead."
        )


class EnhancementError(JusticeAllyError):
    """Raised when the generative-text backend cannot produce a document."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Enhancement ({operation}) failed: {message}",
            {"operation": operation, **(details or {})},
        )
        self.operation = operation


class LLMError(JusticeAllyError):
    """Raised when a completion backend call fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"LLM {operation} failed: {message}",
            {"operation": operation, **(details or {})},
        )
        self.operation = operation


class UnknownDocumentTypeError(JusticeAllyError):
    """Raised when a document type has no template (yet)."""

    def __init__(self, document_type: str) -> None:
        super().__init__(
            f"Document type '{document_type}' is not available yet",
            {"document_type": document_type},
        )
        self.document_type = document_type


class StateTransitionError(JusticeAllyError):
    """Raised when an event is not valid in the session's current phase."""

    def __init__(self, phase: str, event: str) -> None:
        super().__init__(
            f"Cannot handle '{event}' while session is '{phase}'",
            {"phase": phase, "event": event},
        )
        self.phase = phase
        self.event = event


class RequestInFlightError(StateTransitionError):
    """Raised when a new request arrives while another one is pending."""


class SessionNotFoundError(JusticeAllyError):
    """Raised when a referenced session does not exist or has expired."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Session '{session_id}' does not exist",
            {"session_id": session_id},
        )
        self.session_id = session_id
