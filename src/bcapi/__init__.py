"""bcapi public API."""

from __future__ import annotations

from bcapi.auth import (
    FileTokenStore,
    MemoryTokenStore,
    SiteHelper,
    SiteInfo,
    TokenStore,
)
from bcapi.controller import HttpTransport
from bcapi.errors import (
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
from bcapi.models import (
    File,
    Folder,
    LiteralPath,
    ParentResource,
    RemoteResource,
    ResolvedPath,
    RootFolder,
    SyncState,
    resolve_path,
)

__all__ = [
    # Resources
    "RemoteResource",
    "File",
    "Folder",
    "RootFolder",
    "SyncState",
    # Paths
    "LiteralPath",
    "ParentResource",
    "ResolvedPath",
    "resolve_path",
    # Site / auth
    "SiteHelper",
    "SiteInfo",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "HttpTransport",
    # Errors
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
