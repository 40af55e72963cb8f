"""
Exceptions raised by document extraction and analysis.

Unsupported formats are not errors: they produce an empty extraction with an
explanatory note. Everything below signals a real failure.
"""

from typing import Any, Optional


class AnalysisError(Exception):
    """Base exception for extraction and analysis failures."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ExtractionError(AnalysisError):
    """Text could not be extracted from a document."""


class MalformedContainerError(ExtractionError):
    """The bytes are not a valid instance of the claimed container format."""

    def __init__(self, fmt: str, reason: str, size: int) -> None:
        super().__init__(
            f"Malformed {fmt.upper()} document: {reason}",
            {"format": fmt, "size": size},
        )
        self.format = fmt


class ExtractionTimeoutError(ExtractionError):
    """Analysis did not complete within the allotted time."""

    def __init__(self, timeout: float, filename: str) -> None:
        super().__init__(
            f"Analysis of '{filename}' exceeded {timeout:g}s",
            {"timeout": timeout, "filename": filename},
        )


class RejectedUploadError(AnalysisError):
    """Document refused before extraction (type not accepted)."""


class DocumentTooLargeError(RejectedUploadError):
    """Document exceeds the maximum accepted size."""

    def __init__(self, size: int, max_size: int, filename: str) -> None:
        super().__init__(
            f"Document '{filename}' size ({size} bytes) exceeds maximum ({max_size} bytes)",
            {"size": size, "max_size": max_size, "filename": filename},
        )
