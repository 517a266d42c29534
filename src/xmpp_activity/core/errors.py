"""Activity translation exceptions."""

from __future__ import annotations


class ActivityError(Exception):
    """Base for activity translation errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class MalformedRatingError(ActivityError):
    """Rating text is not a number (strict mode only)."""


class ActivityConfigurationError(ActivityError):
    """Config validation or load failure."""
