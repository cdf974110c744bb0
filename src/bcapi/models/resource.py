"""Base model for a single file or folder on the storage API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from concurrent.futures import Future
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from bcapi.errors import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    TransportError,
)
from bcapi.util.time import parse_timestamp, to_rfc3339

from .path import ROOT_PATH, LiteralPath, ParentResource, PathSource, resolve_path

if TYPE_CHECKING:
    from bcapi.controller import HttpTransport

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Attributes derived from the path; server payloads never override them.
IDENTITY_KEYS: tuple[str, ...] = ("path", "name", "folderPath", "type")

ResourceSource = Union[str, PathSource, "RemoteResource", Mapping[str, Any], None]


class SyncState(str, Enum):
    """Whether the local attributes are known to match the server."""

    UNSYNCED = "unsynced"
    SYNCED = "synced"
    DESTROYED = "destroyed"


class RemoteResource:
    """
    A file or folder addressed by its canonical path.

    Construction is local and synchronous. Network operations return
    `concurrent.futures.Future` objects that settle exactly once; on
    failure the local attributes and sync state are left untouched.
    """

    TYPE: str = ""

    def __init__(
        self,
        source: ResourceSource = None,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        transport: Optional["HttpTransport"] = None,
    ) -> None:
        if isinstance(source, Mapping):
            if attributes is not None:
                raise InvalidArgumentError(
                    "Pass attributes either as the first argument or as 'attributes'"
                )
            attributes = source
            source = None

        attrs = dict(attributes or {})
        path_source, name = _to_path_source(source, attrs)
        resolved = resolve_path(path_source, name)

        self._resolved = resolved
        self._transport = transport
        self._sync_state = SyncState.UNSYNCED
        self._attributes: dict[str, Any] = self._with_identity(
            {k: v for k, v in attrs.items() if k not in IDENTITY_KEYS}
        )

    # ----------------------------
    # Attributes
    # ----------------------------
    @property
    def path(self) -> str:
        return self._resolved.path

    @property
    def name(self) -> str:
        return self._resolved.name

    @property
    def folder_path(self) -> str:
        return self._resolved.folder_path

    @property
    def last_modified(self) -> Optional[datetime]:
        return self._attributes.get("lastModified")

    @property
    def size(self) -> Optional[int]:
        return self._attributes.get("size")

    @property
    def sync_state(self) -> SyncState:
        return self._sync_state

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    @property
    def transport(self) -> Optional["HttpTransport"]:
        return self._transport

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def is_new(self) -> bool:
        return self._sync_state is SyncState.UNSYNCED

    # ----------------------------
    # Network operations
    # ----------------------------
    def fetch(self) -> "Future[RemoteResource]":
        """GET the JSON attributes and replace the local ones with them."""
        return self._submit(self._fetch_now)

    def save(self) -> "Future[RemoteResource]":
        """PUT the current attributes; the response is authoritative."""
        return self._submit(self._save_now)

    def destroy(self) -> "Future[None]":
        """DELETE the resource. Afterwards every operation fails with NotFoundError."""
        return self._submit(self._destroy_now)

    # ----------------------------
    # Internals
    # ----------------------------
    def _submit(self, func: Callable[..., T], *args: Any) -> "Future[T]":
        try:
            transport = self._require_transport()
        except InvalidStateError as exc:
            failed: "Future[T]" = Future()
            failed.set_exception(exc)
            return failed
        return transport.submit(func, *args)

    def _require_transport(self) -> "HttpTransport":
        if self._transport is None:
            raise InvalidStateError(
                "Resource is not bound to a transport",
                details={"path": self.path},
            )
        return self._transport

    def _ensure_not_destroyed(self) -> None:
        if self._sync_state is SyncState.DESTROYED:
            raise NotFoundError(
                "Resource has been destroyed",
                details={"path": self.path, "status_code": 404},
            )

    def _metadata_url(self) -> str:
        return self._require_transport().metadata_url(self.path)

    def _content_url(self) -> str:
        return self._require_transport().content_url(self.path)

    def _fetch_now(self) -> "RemoteResource":
        self._ensure_not_destroyed()
        data = self._require_transport().execute(
            "GET",
            self._metadata_url(),
            parse_json=True,
        )
        self._apply_payload(data)
        return self

    def _save_now(self) -> "RemoteResource":
        self._ensure_not_destroyed()
        body = json.dumps(_serialize_attributes(self._attributes)).encode("utf-8")
        data = self._require_transport().execute(
            "PUT",
            self._metadata_url(),
            body=body,
            headers={"content-type": "application/json"},
            parse_json=True,
        )
        self._apply_payload(data or self._attributes)
        return self

    def _destroy_now(self) -> None:
        if self.path == ROOT_PATH:
            raise InvalidStateError(
                "The root folder cannot be destroyed",
                details={"path": self.path},
            )
        self._ensure_not_destroyed()
        self._require_transport().execute("DELETE", self._metadata_url())
        self._sync_state = SyncState.DESTROYED
        logger.info("Destroyed %s %s", self.TYPE, self.path)

    def _apply_payload(self, data: Any) -> None:
        if not isinstance(data, Mapping):
            raise TransportError(
                "Server returned a non-object attribute payload",
                details={"path": self.path, "payload_type": type(data).__name__},
            )
        # Build the whole mapping first so a bad payload leaves no partial state.
        attributes = self._with_identity(_normalize_payload(data))
        self._attributes = attributes
        self._sync_state = SyncState.SYNCED
        logger.info("Synced %s %s", self.TYPE, self.path)

    def _with_identity(self, attributes: dict[str, Any]) -> dict[str, Any]:
        attributes.update(
            {
                "path": self._resolved.path,
                "name": self._resolved.name,
                "folderPath": self._resolved.folder_path,
                "type": self.TYPE,
            }
        )
        return attributes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteResource):
            return NotImplemented
        return self.TYPE == other.TYPE and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.TYPE, self.path))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(path={self.path!r}, "
            f"state={self._sync_state.value!r})"
        )


def _to_path_source(
    source: ResourceSource,
    attrs: dict[str, Any],
) -> tuple[PathSource, Optional[str]]:
    name = attrs.get("name")

    if isinstance(source, (LiteralPath, ParentResource)):
        return source, name

    if isinstance(source, str):
        return LiteralPath(source), name

    if isinstance(source, RemoteResource):
        if source.TYPE != "folder":
            raise InvalidArgumentError(
                "Only folders can be used as a parent",
                details={"path": source.path, "type": source.TYPE},
            )
        return ParentResource(source.path), name

    if source is None:
        # A full path takes precedence over a folderPath/name pair.
        if isinstance(attrs.get("path"), str):
            return LiteralPath(attrs["path"]), None
        if isinstance(attrs.get("folderPath"), str):
            if name is None:
                raise InvalidArgumentError(
                    "'name' is required together with 'folderPath'",
                    details={"folderPath": attrs["folderPath"]},
                )
            return LiteralPath(attrs["folderPath"]), name
        raise InvalidArgumentError("A path, a parent folder or a folderPath is required")

    raise InvalidArgumentError(
        "Unsupported resource source",
        details={"type": type(source).__name__},
    )


def _normalize_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    attributes = {k: v for k, v in data.items() if k not in IDENTITY_KEYS}

    raw_modified = data.get("lastModified")
    if isinstance(raw_modified, datetime):
        attributes["lastModified"] = raw_modified
    elif raw_modified is not None:
        try:
            attributes["lastModified"] = parse_timestamp(raw_modified)
        except ValueError as exc:
            raise TransportError(
                "Malformed lastModified in attribute payload",
                details={"lastModified": raw_modified},
                cause=exc,
            ) from exc

    raw_size = data.get("size")
    if isinstance(raw_size, str) and raw_size.isdigit():
        attributes["size"] = int(raw_size)
    elif isinstance(raw_size, int) and not isinstance(raw_size, bool):
        attributes["size"] = raw_size
    elif raw_size is not None:
        raise TransportError(
            "Malformed size in attribute payload",
            details={"size": raw_size},
        )

    return attributes


def _serialize_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in attributes.items():
        out[key] = to_rfc3339(value) if isinstance(value, datetime) else value
    return out
