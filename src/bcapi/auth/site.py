"""Site helper: base URL, site id and token lookup."""

from __future__ import annotations

from typing import Optional

from bcapi.errors import AuthConfigurationError

from .site_info import SiteInfo
from .token_store import FileTokenStore, TokenStore

SITE_ID: str = "current"
GENERIC_TOKEN_KEY: str = "genericToken"
SITE_TOKEN_KEY: str = "siteToken"


class SiteHelper:
    """
    Resolve the API root URL and authentication tokens.

    A helper without a token store is allowed to exist, but every token
    lookup on it raises AuthConfigurationError. HttpTransport refuses such a
    helper outright.
    """

    def __init__(
        self,
        token_store: Optional[TokenStore] = None,
        *,
        root_url: str = "",
    ) -> None:
        if token_store is not None and not _is_token_store(token_store):
            raise AuthConfigurationError(
                "token_store must provide get(key) and set(key, value)",
                details={"type": type(token_store).__name__},
            )
        self._token_store = token_store
        self._root_url = SiteInfo(root_url=root_url).root_url

    @classmethod
    def from_site_info(cls, info: SiteInfo) -> "SiteHelper":
        store = FileTokenStore(info.token_file) if info.token_file else None
        return cls(store, root_url=info.root_url)

    @property
    def has_token_store(self) -> bool:
        return self._token_store is not None

    def get_root_url(self) -> str:
        return self._root_url

    def get_site_id(self) -> str:
        return SITE_ID

    def get_generic_token(self) -> Optional[str]:
        return self._require_store().get(GENERIC_TOKEN_KEY)

    def get_site_token(self) -> Optional[str]:
        return self._require_store().get(SITE_TOKEN_KEY)

    def set_generic_token(self, token: str) -> None:
        self._require_store().set(GENERIC_TOKEN_KEY, token)

    def set_site_token(self, token: str) -> None:
        self._require_store().set(SITE_TOKEN_KEY, token)

    def _require_store(self) -> TokenStore:
        if self._token_store is None:
            raise AuthConfigurationError(
                "No token store configured; cannot look up authentication tokens"
            )
        return self._token_store


def _is_token_store(obj: object) -> bool:
    return callable(getattr(obj, "get", None)) and callable(getattr(obj, "set", None))
