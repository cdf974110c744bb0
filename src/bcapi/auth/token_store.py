"""Client-side token storage for bcapi."""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Protocol, runtime_checkable

from bcapi.errors import AuthConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenStore(Protocol):
    """Key/value store holding authentication tokens."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryTokenStore:
    """TokenStore kept in process memory."""

    def __init__(self, tokens: Optional[dict[str, str]] = None) -> None:
        self._tokens: dict[str, str] = dict(tokens or {})

    def get(self, key: str) -> Optional[str]:
        return self._tokens.get(key)

    def set(self, key: str, value: str) -> None:
        self._tokens[key] = value


class FileTokenStore:
    """
    TokenStore persisted as a JSON object on disk.

    The file is read on every lookup so tokens written by another process
    (e.g. a login step) are picked up without restarting.
    """

    def __init__(self, token_file: str) -> None:
        if not isinstance(token_file, str) or not token_file.strip():
            raise AuthConfigurationError("token_file must be a non-empty string")
        self._token_file = token_file

    @property
    def token_file(self) -> str:
        return self._token_file

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        tokens = self._load()
        tokens[key] = value

        token_dir = os.path.dirname(self._token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(self._token_file, "w", encoding="utf-8") as f:
                json.dump(tokens, f)
        except OSError as exc:
            raise AuthConfigurationError(
                "Failed to save token file",
                details={"token_file": self._token_file},
                cause=exc,
            ) from exc
        logger.debug("Stored token %r in %s", key, self._token_file)

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self._token_file):
            return {}

        try:
            with open(self._token_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise AuthConfigurationError(
                "Failed to load token file",
                details={"token_file": self._token_file},
                cause=exc,
            ) from exc

        if not isinstance(data, dict):
            raise AuthConfigurationError(
                "Token file must contain a JSON object",
                details={"token_file": self._token_file},
            )
        return data
