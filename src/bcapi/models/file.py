"""File resource: raw content upload and download."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Union

from bcapi.errors import InvalidArgumentError

from .resource import RemoteResource, SyncState

logger = logging.getLogger(__name__)

Content = Union[bytes, bytearray, str]

CONTENT_TYPE: str = "application/octet-stream"


class File(RemoteResource):
    """
    A file on the storage API.

    Metadata (`fetch`/`save`/`destroy`) and content (`upload`/`download`)
    live on two different endpoints of the same path. Content is never
    cached locally.
    """

    TYPE = "file"

    def upload(self, content: Content) -> "Future[None]":
        """
        Write content to the file, creating or replacing it.

        The future resolves with None; call `fetch` (or use
        `upload_and_fetch`) to read back lastModified.
        """
        data = _to_bytes(content)
        return self._submit(self._upload_now, data)

    def upload_and_fetch(self, content: Content) -> "Future[File]":
        """
        Upload, then fetch once the upload succeeded.

        If the fetch fails the future fails with the fetch error; the upload
        has still happened on the server.
        """
        data = _to_bytes(content)
        return self._submit(self._upload_and_fetch_now, data)

    def download(self) -> "Future[bytes]":
        """Read the content exactly as stored."""
        return self._submit(self._download_now)

    def download_text(self, encoding: str = "utf-8") -> "Future[str]":
        return self._submit(self._download_text_now, encoding)

    # ----------------------------
    # Internals
    # ----------------------------
    def _upload_now(self, data: bytes) -> None:
        self._ensure_not_destroyed()
        self._require_transport().execute(
            "PUT",
            self._content_url(),
            body=data,
            headers={"content-type": CONTENT_TYPE},
        )
        attributes = dict(self._attributes)
        attributes["size"] = len(data)
        self._attributes = attributes
        self._sync_state = SyncState.SYNCED
        logger.info("Uploaded %d bytes to %s", len(data), self.path)

    def _upload_and_fetch_now(self, data: bytes) -> "File":
        self._upload_now(data)
        self._fetch_now()
        return self

    def _download_now(self) -> bytes:
        self._ensure_not_destroyed()
        content = self._require_transport().execute(
            "GET",
            self._content_url(),
            headers={"accept": CONTENT_TYPE},
        )
        return bytes(content)

    def _download_text_now(self, encoding: str) -> str:
        return self._download_now().decode(encoding)


def _to_bytes(content: Content) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    raise InvalidArgumentError(
        "content must be bytes, bytearray or str",
        details={"type": type(content).__name__},
    )
