"""Public model exports for bcapi."""

from __future__ import annotations

from .file import File
from .folder import Folder, RootFolder
from .path import LiteralPath, ParentResource, PathSource, ResolvedPath, resolve_path
from .resource import RemoteResource, SyncState

__all__ = [
    "RemoteResource",
    "SyncState",
    "File",
    "Folder",
    "RootFolder",
    "PathSource",
    "LiteralPath",
    "ParentResource",
    "ResolvedPath",
    "resolve_path",
]
