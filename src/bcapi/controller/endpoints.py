"""URL conventions for the storage API."""

from __future__ import annotations

from urllib.parse import quote

STORAGE_PREFIX: str = "/api/v2/admin/sites/{site_id}/storage"

# Query flag selecting the JSON metadata representation of a storage path.
META_QUERY: str = "meta"


def storage_url(root_url: str, site_id: str, path: str) -> str:
    """Raw URL for a storage path (no representation selected)."""
    prefix = STORAGE_PREFIX.format(site_id=quote(site_id, safe=""))
    return f"{root_url}{prefix}{quote(path, safe='/')}"


def content_url(root_url: str, site_id: str, path: str) -> str:
    """Endpoint holding the raw bytes of a file."""
    return storage_url(root_url, site_id, path)


def metadata_url(root_url: str, site_id: str, path: str) -> str:
    """Endpoint holding the JSON attributes of a file or folder."""
    return f"{storage_url(root_url, site_id, path)}?{META_QUERY}"
