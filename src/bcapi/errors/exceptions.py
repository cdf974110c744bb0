"""Exception hierarchy and HTTP error mapping for bcapi."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class BCApiError(Exception):
    """
    Base exception for bcapi.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthConfigurationError(BCApiError):
    """Raised when no token store is configured or no token can be found."""


class InvalidArgumentError(BCApiError):
    """Raised when a resource is constructed or called with bad arguments."""


class InvalidStateError(BCApiError):
    """Raised when an operation is not allowed for the resource (e.g. root destroy)."""


class TransportError(BCApiError):
    """
    Raised when an HTTP exchange fails.

    The ``(cause, status_text, payload)`` triple is what callers inspect to
    classify a failure; see ``as_triple``.
    """

    @property
    def status_code(self) -> int:
        value = self.details.get("status_code")
        return value if isinstance(value, int) else 0

    @property
    def status_text(self) -> Optional[str]:
        return self.details.get("status_text")

    @property
    def payload(self) -> Any:
        return self.details.get("payload")

    def as_triple(self) -> tuple[Optional[BaseException], Optional[str], Any]:
        return self.cause, self.status_text, self.payload


class NotFoundError(TransportError):
    """Raised when the remote resource does not exist (HTTP 404 or destroyed)."""


class AuthError(TransportError):
    """Raised when the server rejects the token (HTTP 401/403)."""


class ConflictError(TransportError):
    """Raised when the server reports a conflict (HTTP 409/412)."""


class NetworkError(TransportError):
    """Raised when no HTTP response was received at all."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to bcapi exceptions."""

    status_code: int
    status_text: str | None = None
    message: str | None = None
    payload: Any = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> TransportError:
    """
    Map an HTTP error to a bcapi exception.

    Policy:
        - 401/403 -> AuthError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 0 (no response) -> NetworkError
        - otherwise -> TransportError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "status_text": info.status_text,
        "payload": info.payload,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code in (401, 403):
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 0:
        return NetworkError(message, details=details, cause=cause)

    return TransportError(message, details=details, cause=cause)
