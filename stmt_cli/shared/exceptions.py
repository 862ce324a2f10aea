"""Project-wide custom exceptions."""

from __future__ import annotations

from collections.abc import Sequence


class StatementToolError(Exception):
    """Base exception for the statement normalization suite."""


class ConfigurationError(StatementToolError):
    """Raised when configuration loading or validation fails."""


class NormalizationError(StatementToolError):
    """Raised when a statement cannot be converted."""


class TableReadError(NormalizationError):
    """Raised when the input file cannot be read as delimited text."""


class HeaderNotFoundError(NormalizationError):
    """Raised when no row names both a debit and a credit column."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Could not find header row. Expected a row containing both 'debit' and 'credit'."
        )


class MissingColumnError(NormalizationError):
    """Raised when a required field has no confirmed column."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing required column(s): {', '.join(self.missing)}")


class DateParseError(NormalizationError, ValueError):
    """Raised when a single date value cannot be parsed."""


class NoValidTransactionsError(NormalizationError):
    """Raised when every row of a statement was skipped."""

    def __init__(self, skipped: int = 0) -> None:
        self.skipped = skipped
        super().__init__(
            f"No valid transactions found ({skipped} row(s) skipped). "
            "Check the column mapping and the date/amount formats."
        )


class CanonicalFormatError(NormalizationError):
    """Raised when text handed to the canonical reader has a foreign header."""
