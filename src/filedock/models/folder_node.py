"""
Folder tree models for upload batches.

`FolderNode.to_dict()` is the `folderStructure` field sent with a folder
upload. Every node, the root included, has the same
`{"type", "name", "children", "files"}` shape. Servers that expect a bare
mapping of top-level folder name to node must read `children` of the root
instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


@dataclass(slots=True)
class UploadFile:
    """
    A file handle stamped with its path relative to the upload root.

    `source` is whatever the handle resolves to (a local Path, bytes, ...).
    """

    name: str
    relative_path: str
    source: Any = None


@dataclass(slots=True)
class FolderFile:
    """Leaf entry of a FolderNode."""

    name: str
    relative_path: str
    source: Any = None


@dataclass(slots=True)
class FolderNode:
    """
    Local tree node aggregating files and subfolders by name.

    The root node represents the whole upload batch and has an empty name.
    """

    name: str = ""
    files: list[FolderFile] = field(default_factory=list)
    subfolders: dict[str, "FolderNode"] = field(default_factory=dict)

    def child(self, name: str) -> "FolderNode":
        """Return the named subfolder, creating it if missing."""
        node = self.subfolders.get(name)
        if node is None:
            node = FolderNode(name=name)
            self.subfolders[name] = node
        return node

    def find(self, path: str) -> Optional["FolderNode"]:
        """Return the node at a '/'-separated folder path, or None."""
        node: Optional[FolderNode] = self
        for part in (p for p in path.split("/") if p):
            if node is None:
                return None
            node = node.subfolders.get(part)
        return node

    def iter_files(self) -> Iterator[FolderFile]:
        """Yield every file in the subtree, depth-first, own files first."""
        yield from self.files
        for sub in self.subfolders.values():
            yield from sub.iter_files()

    def file_count(self) -> int:
        return sum(1 for _ in self.iter_files())

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the `folderStructure` upload field.

        Every node becomes ``{"type": "folder", "name", "children", "files"}``
        where `children` maps subfolder names to nodes of the same shape.
        """
        return {
            "type": "folder",
            "name": self.name,
            "children": {name: sub.to_dict() for name, sub in self.subfolders.items()},
            "files": [
                {"name": f.name, "relativePath": f.relative_path} for f in self.files
            ],
        }
