"""Custom exceptions for the analytics core.

"No data found" is never an exception here: empty inputs yield empty
results. Exceptions are reserved for invalid parameters and for operations
that are mathematically undefined on the given input.
"""

from typing import Any


class StorePulseError(Exception):
    """Base exception for StorePulse errors.

    All application-specific exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def title(self) -> str:
        """Short summary of the problem type."""
        return self.code.replace("_", " ").title()


class InvalidInputError(StorePulseError):
    """Invalid parameter passed to an analytics operation.

    Use for caller mistakes such as a non-positive horizon or a validation
    split outside (0, 1).
    """

    def __init__(
        self,
        message: str = "Invalid input",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            details=details,
        )


class InsufficientHistoryError(StorePulseError):
    """Not enough historical points to fit the forecast.

    The trend regression is undefined with fewer than two weekly totals.
    """

    def __init__(
        self,
        message: str = "Insufficient history",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="INSUFFICIENT_HISTORY",
            details=details,
        )
