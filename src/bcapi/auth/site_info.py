"""Site configuration for bcapi."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ROOT_URL_ENV = "BCAPI_ROOT_URL"
TOKEN_FILE_ENV = "BCAPI_TOKEN_FILE"


@dataclass(slots=True, frozen=True)
class SiteInfo:
    """
    Where the API lives and where tokens are persisted.

    root_url:
        API base URL prefix. "" leaves URLs relative; that only works with
        an injected http object that resolves them, and HttpTransport
        rejects it otherwise.
    token_file:
        Optional path to a JSON token store. Without it, token lookups
        fail with AuthConfigurationError.
    """

    root_url: str = ""
    token_file: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.root_url, str):
            raise TypeError("SiteInfo.root_url must be a str")

        if self.root_url and not self.root_url.startswith(("http://", "https://")):
            raise ValueError("SiteInfo.root_url must be empty or an http(s) URL")

        # frozen dataclass: strip the trailing slash through object.__setattr__
        object.__setattr__(self, "root_url", self.root_url.rstrip("/"))

        if self.token_file is not None:
            if not isinstance(self.token_file, str) or not self.token_file.strip():
                raise ValueError("SiteInfo.token_file must be a non-empty string")

    @classmethod
    def from_env(cls) -> "SiteInfo":
        """Build from BCAPI_ROOT_URL / BCAPI_TOKEN_FILE."""
        root_url = os.environ.get(ROOT_URL_ENV, "").strip()
        token_file = os.environ.get(TOKEN_FILE_ENV, "").strip() or None
        return cls(root_url=root_url, token_file=token_file)
