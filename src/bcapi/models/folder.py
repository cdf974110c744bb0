"""Folder resources and the root folder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from .file import File
from .path import ROOT_PATH, ParentResource
from .resource import RemoteResource

if TYPE_CHECKING:
    from bcapi.controller import HttpTransport

ChildSpec = Union[str, Mapping[str, Any]]


class Folder(RemoteResource):
    """
    A folder on the storage API.

    Children are created on demand by `file` and `folder`; the folder keeps
    no references to them. `fetch` returns the folder's own attributes only.
    """

    TYPE = "folder"

    def file(self, spec: ChildSpec) -> File:
        """Build (locally) the File named spec inside this folder."""
        return File(
            ParentResource(self.path),
            _child_attributes(spec),
            transport=self._transport,
        )

    def folder(self, spec: ChildSpec) -> "Folder":
        """Build (locally) the sub-Folder named spec inside this folder."""
        return Folder(
            ParentResource(self.path),
            _child_attributes(spec),
            transport=self._transport,
        )


class RootFolder(Folder):
    """The folder at "/". Like any resource at "/", it can never be destroyed."""

    def __init__(self, *, transport: Optional["HttpTransport"] = None) -> None:
        super().__init__(ROOT_PATH, transport=transport)


def _child_attributes(spec: ChildSpec) -> dict[str, Any]:
    if isinstance(spec, str):
        return {"name": spec}
    return dict(spec)
