from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    CLAIMS = "claims"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class SeederError(Exception):
    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN
    status_code: int | None = None
    code: str | None = None
    inner_error: Exception | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @property
    def recovery_suggestion(self) -> str | None:
        if self.category is ErrorCategory.CONFIGURATION:
            return "Check the settings file and SESSION_SEEDER_* environment variables."
        if self.category is ErrorCategory.AUTHENTICATION:
            return (
                "Verify the test account credentials and that the app registration "
                "allows the resource owner password credentials flow."
            )
        if self.category is ErrorCategory.NETWORK:
            return "Check connectivity to the identity provider and try again."
        if self.category is ErrorCategory.VALIDATION:
            return "The identity provider rejected the request or returned an unexpected payload."
        if self.category is ErrorCategory.CLAIMS:
            return "The id token is missing the claims required to build cache keys."
        return None


class ConfigurationError(SeederError):
    def __init__(
        self,
        message: str = "Invalid configuration",
        missing: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message=message, category=ErrorCategory.CONFIGURATION)
        self.missing = missing


class TokenRequestError(SeederError):
    def __init__(
        self,
        message: str = "Token request failed",
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        status_code: int | None = None,
        code: str | None = None,
        description: str | None = None,
        correlation_id: str | None = None,
        inner_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=category,
            status_code=status_code,
            code=code,
            inner_error=inner_error,
        )
        self.description = description
        self.correlation_id = correlation_id


class ClaimsDecodeError(SeederError):
    def __init__(
        self,
        message: str = "Unable to decode id token claims",
        inner_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CLAIMS,
            inner_error=inner_error,
        )


__all__ = [
    "ClaimsDecodeError",
    "ConfigurationError",
    "ErrorCategory",
    "SeederError",
    "TokenRequestError",
]
