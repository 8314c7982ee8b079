"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class NormalizationError(AppError):
    """A source payload could not be turned into a plausible draw result."""

    def __init__(self, message: str = "Implausible draw data", details: Any | None = None) -> None:
        super().__init__(code="normalization_error", message=message, status_code=422, details=details)


class SourceUnavailable(AppError):
    """One result source could not produce a usable response."""

    def __init__(self, message: str = "Source unavailable", details: Any | None = None) -> None:
        super().__init__(code="source_unavailable", message=message, status_code=502, details=details)


class NoResultAvailable(AppError):
    """Every configured result source failed."""

    def __init__(self, message: str = "No result source returned a draw", details: Any | None = None) -> None:
        super().__init__(code="no_result_available", message=message, status_code=503, details=details)


class ReconciliationError(AppError):
    """Settlement could not be committed; nothing was settled."""

    def __init__(
        self,
        message: str = "No settlement occurred this cycle",
        details: Any | None = None,
    ) -> None:
        super().__init__(code="reconciliation_failed", message=message, status_code=500, details=details)
