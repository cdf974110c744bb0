"""Public error exports for bcapi."""

from __future__ import annotations

from .exceptions import (
    AuthConfigurationError,
    AuthError,
    BCApiError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    TransportError,
    map_http_error,
)

__all__ = [
    "BCApiError",
    "AuthConfigurationError",
    "InvalidArgumentError",
    "InvalidStateError",
    "TransportError",
    "NotFoundError",
    "AuthError",
    "ConflictError",
    "NetworkError",
    "HttpErrorInfo",
    "map_http_error",
]
