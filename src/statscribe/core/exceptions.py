"""Exception hierarchy for statblock detection and parsing.

Only conditions that make a whole block or document unusable are raised;
section-level problems degrade to typed defaults plus a Diagnostic.
"""

from typing import Any


class StatscribeError(Exception):
    """Base exception for all statscribe errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class EmptyInputError(StatscribeError):
    """Raised when a block holds no non-blank lines after cleanup."""

    def __init__(self, message: str = "No content to parse", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class DocumentReadError(StatscribeError):
    """Raised when a source document cannot be read as text."""

    def __init__(self, message: str, *, source_file: str | None = None) -> None:
        details = {"source_file": source_file} if source_file else None
        super().__init__(message, details=details)
