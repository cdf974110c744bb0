"""Public auth exports for bcapi."""

from __future__ import annotations

from .site import GENERIC_TOKEN_KEY, SITE_ID, SITE_TOKEN_KEY, SiteHelper
from .site_info import SiteInfo
from .token_store import FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "SiteHelper",
    "SiteInfo",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "SITE_ID",
    "GENERIC_TOKEN_KEY",
    "SITE_TOKEN_KEY",
]
