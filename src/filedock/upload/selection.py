from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Union

from filedock.errors import InvalidArgumentError
from filedock.models import UploadFile

PathLike = Union[str, "os.PathLike[str]"]


def collect_files(paths: Iterable[PathLike]) -> list[UploadFile]:
    """Wrap individually selected files; they carry no folder path."""
    result: list[UploadFile] = []
    for p in paths:
        path = Path(p)
        if not path.is_file():
            raise InvalidArgumentError("not a file", details={"path": str(path)})
        result.append(UploadFile(name=path.name, relative_path="", source=path))
    return result


def collect_directory(directory: PathLike) -> list[UploadFile]:
    """
    List every file under a selected directory.

    Relative paths start with the directory's own name ("photos/2024/a.jpg"
    for a selection of "photos"), the way a directory picker reports them.
    Files are returned in sorted path order.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise InvalidArgumentError("not a directory", details={"path": str(root)})

    result: list[UploadFile] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root).as_posix()
        result.append(
            UploadFile(name=path.name, relative_path=f"{root.name}/{rel}", source=path)
        )
    return result
