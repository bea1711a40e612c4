"""Custom exception classes for the users API.

Every failure a handler can produce is one of the exceptions below. Each
carries the HTTP status code it is reported with and renders to the
uniform error body ``{"message": ...}``.
"""

from __future__ import annotations

from typing import Any
from typing import Optional
from typing import Sequence

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        return {"message": self.message}


class ValidationError(AppError):
    """Raised when the inbound payload is malformed or incomplete.

    Validation faults are local and never forwarded to the identity
    provider. They are reported with status 500 to match the behaviour
    existing API clients rely on.
    """

    def __init__(self, message: str, fields: Sequence[str] = ()):
        self.fields = tuple(fields)
        if self.fields:
            message = f"{message}: {', '.join(self.fields)}"
        super().__init__(message, status_code=500)


class ProviderError(AppError):
    """Raised when the identity provider rejects or fails a call.

    The provider's own status code is propagated to the caller. Faults
    that carry no status (network errors, for instance) are reported
    with 500.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, status_code=status_code or 500)
        self.provider_status = status_code
        self.error_code = error_code


class UnexpectedError(AppError):
    """Raised for local failures that are neither validation nor provider faults."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class ConfigurationError(AppError):
    """Raised when required configuration is missing or unreadable.

    Use when environment variables or secrets are not properly configured.
    """

    def __init__(self, config_name: str, detail: Optional[str] = None):
        message = f"Missing required configuration: {config_name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, status_code=500)
        self.config_name = config_name


class SecretHashError(ConfigurationError):
    """Raised when the secret hash cannot be computed."""

    def __init__(self, detail: str):
        super().__init__("app client secret", detail=detail)


def from_client_error(exc: Exception) -> ProviderError:
    """Convert a botocore exception into a ProviderError.

    ``ClientError`` carries the HTTP status and error message returned by
    the service. ``BotoCoreError`` (connection failures, timeouts) carries
    neither, so only its string form is kept.
    """
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {}) or {}
        metadata = exc.response.get("ResponseMetadata", {}) or {}
        return ProviderError(
            error.get("Message") or str(exc),
            status_code=metadata.get("HTTPStatusCode"),
            error_code=error.get("Code"),
        )
    if isinstance(exc, BotoCoreError):
        return ProviderError(str(exc))
    return ProviderError(str(exc) or type(exc).__name__)
