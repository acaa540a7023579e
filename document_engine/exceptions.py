"""Custom exceptions for the claim composition engine.

Provides a hierarchy of exceptions for better error handling and reporting.
"""

from __future__ import annotations

from typing import Any


class EngineError(Exception):
    """Base exception for all engine errors."""

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


class ValidationError(EngineError):
    """Raised when a case record fails validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value
        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = str(value)[:100]


class UnsupportedClaimTypeError(EngineError):
    """Raised when no composer is registered for a claim type."""

    def __init__(self, claim_type: str, available: list[str] | None = None) -> None:
        super().__init__(
            f"No document composer for claim type '{claim_type}'",
            {"claim_type": claim_type, "available": available or []},
        )
        self.claim_type = claim_type


class DocumentGenerationError(EngineError):
    """Raised when a document cannot be composed from the supplied record."""

    def __init__(
        self,
        document_type: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Failed to generate {document_type}: {message}",
            {"document_type": document_type, **(details or {})},
        )
        self.document_type = document_type


class TransformerError(EngineError):
    """Raised when the legal language transformer fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Transformer {operation} failed: {message}",
            {"operation": operation, **(details or {})},
        )
        self.operation = operation
