"""Rebuild a folder tree from a flat list of files with relative paths."""

from __future__ import annotations

from typing import Iterable, Protocol

from filedock.errors import InvalidPathError
from filedock.models import FolderFile, FolderNode


class RelativeFile(Protocol):
    name: str
    relative_path: str


def split_relative_path(relative_path: str) -> tuple[list[str], str]:
    """
    Split "a/b/c.txt" into (["a", "b"], "c.txt").

    Raises:
        InvalidPathError: on an empty path or an empty segment.
    """
    if not relative_path:
        raise InvalidPathError("relative path is empty")

    parts = relative_path.split("/")
    if any(not p for p in parts):
        raise InvalidPathError(
            "relative path has an empty segment",
            details={"relative_path": relative_path},
        )
    return parts[:-1], parts[-1]


def build_folder_structure(files: Iterable[RelativeFile]) -> FolderNode:
    """
    Group files into a FolderNode tree keyed by their path segments.

    A file without a relative path (a plain selection) falls back to its
    name and lands directly under the root.
    """
    root = FolderNode()

    for f in files:
        relative_path = f.relative_path or f.name
        folders, file_name = split_relative_path(relative_path)

        node = root
        for folder in folders:
            node = node.child(folder)

        node.files.append(
            FolderFile(
                name=file_name,
                relative_path=relative_path,
                source=getattr(f, "source", None),
            )
        )

    return root
