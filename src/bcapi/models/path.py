"""Path resolution for storage resources (no I/O)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from bcapi.errors import InvalidArgumentError

ROOT_PATH: str = "/"
SEPARATOR: str = "/"


@dataclass(frozen=True)
class LiteralPath:
    """A path given as a string by the caller."""

    value: str


@dataclass(frozen=True)
class ParentResource:
    """A parent folder, identified by its canonical path."""

    path: str


PathSource = Union[LiteralPath, ParentResource]


@dataclass(frozen=True)
class ResolvedPath:
    path: str
    name: str
    folder_path: str


def resolve_path(source: PathSource, name: Optional[str] = None) -> ResolvedPath:
    """
    Compute the canonical path, leaf name and folder path.

    Rules:
        - A literal path gets a leading "/" when it lacks one.
        - An explicit name is appended to the literal path, which then
          becomes the folder path.
        - A parent resource always needs an explicit name.
        - Repeated slashes and "."/".." segments are kept as given.
    """
    if isinstance(source, ParentResource):
        if name is None:
            raise InvalidArgumentError(
                "A name is required when resolving against a parent folder",
                details={"parent_path": source.path},
            )
        base = source.path
    elif isinstance(source, LiteralPath):
        base = source.value
    else:
        raise InvalidArgumentError(
            "Unsupported path source",
            details={"type": type(source).__name__},
        )

    if not isinstance(base, str):
        raise InvalidArgumentError("path must be a string", details={"path": base})

    if not base.startswith(SEPARATOR):
        base = SEPARATOR + base

    if name is None:
        return split_path(base)

    validate_name(name)
    return split_path(join_path(base, name))


def join_path(folder_path: str, name: str) -> str:
    if folder_path == ROOT_PATH:
        return ROOT_PATH + name
    return folder_path + SEPARATOR + name


def split_path(path: str) -> ResolvedPath:
    """Split an absolute path at its last separator."""
    index = path.rfind(SEPARATOR)
    name = path[index + 1:]
    folder_path = path[:index] or ROOT_PATH
    return ResolvedPath(path=path, name=name, folder_path=folder_path)


def validate_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("name must be a non-empty string", details={"name": name})
    if SEPARATOR in name:
        raise InvalidArgumentError("name must not contain '/'", details={"name": name})
