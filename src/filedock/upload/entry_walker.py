"""
Flatten dropped filesystem entries into files with relative paths.

An entry is either a file or a directory. Directories are read through a
reader whose `read_entries()` returns successive batches of children and an
empty batch once exhausted. Sibling branches are walked concurrently and
joined before their parent completes; the number of entry reads in flight
at once is capped by a semaphore.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    Union,
)

from filedock.models import UploadFile

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_CONCURRENCY = 16


class DirectoryReader(Protocol):
    async def read_entries(self) -> Sequence["FileSystemEntry"]: ...


class FileSystemEntry(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def is_file(self) -> bool: ...

    @property
    def is_directory(self) -> bool: ...

    async def file(self) -> Any: ...

    def create_reader(self) -> DirectoryReader: ...


class LocalEntry:
    """FileSystemEntry backed by a local path."""

    def __init__(self, path: Union[str, "os.PathLike[str]"]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"LocalEntry({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_file(self) -> bool:
        return self.path.is_file()

    @property
    def is_directory(self) -> bool:
        # Directory symlinks are not followed, matching Path.rglob.
        return self.path.is_dir() and not self.path.is_symlink()

    async def file(self) -> Path:
        if not await asyncio.to_thread(self.path.is_file):
            raise FileNotFoundError(str(self.path))
        return self.path

    def create_reader(self) -> "_LocalDirectoryReader":
        return _LocalDirectoryReader(self.path)


class _LocalDirectoryReader:
    def __init__(self, path: Path) -> None:
        self._path = path
        self._exhausted = False

    async def read_entries(self) -> list[LocalEntry]:
        if self._exhausted:
            return []
        self._exhausted = True
        children = await asyncio.to_thread(lambda: sorted(self._path.iterdir()))
        return [LocalEntry(p) for p in children]


FileCallback = Callable[[UploadFile], Any]


async def walk_entries(
    entries: Sequence[Optional[FileSystemEntry]],
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[UploadFile]:
    """
    Walk every entry and return the files found, in entry order.

    None entries (items that are not filesystem entries) are skipped. A
    failure reading any entry propagates to the caller.
    """
    limiter = _make_limiter(max_concurrency)
    branches = await _join(_walk(entry, "", limiter, None) for entry in entries)
    return [f for branch in branches for f in branch]


async def iter_entry_files(
    entries: Sequence[Optional[FileSystemEntry]],
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> AsyncIterator[UploadFile]:
    """Yield files as soon as they are resolved, in completion order."""
    limiter = _make_limiter(max_concurrency)
    queue: asyncio.Queue[Any] = asyncio.Queue()
    done = object()

    async def produce() -> None:
        try:
            await _join(_walk(entry, "", limiter, queue.put_nowait) for entry in entries)
        finally:
            queue.put_nowait(done)

    task = asyncio.create_task(produce())
    try:
        while True:
            item = await queue.get()
            if item is done:
                break
            yield item
        await task
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


async def _join(coros: Iterable[Awaitable[T]]) -> list[T]:
    """
    Run coros concurrently and return their results in order.

    On the first failure the remaining branches are cancelled and awaited
    before the error is re-raised.
    """
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _make_limiter(max_concurrency: int) -> asyncio.Semaphore:
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be >= 1")
    return asyncio.Semaphore(max_concurrency)


async def _walk(
    entry: Optional[FileSystemEntry],
    prefix: str,
    limiter: asyncio.Semaphore,
    on_file: Optional[FileCallback],
) -> list[UploadFile]:
    if entry is None:
        return []

    if entry.is_file:
        async with limiter:
            handle = await entry.file()
        item = UploadFile(name=entry.name, relative_path=prefix + entry.name, source=handle)
        if on_file is not None:
            on_file(item)
        return [item]

    if entry.is_directory:
        children = await _read_children(entry, limiter)
        child_prefix = prefix + entry.name + "/"
        branches = await _join(
            _walk(child, child_prefix, limiter, on_file) for child in children
        )
        return [f for branch in branches for f in branch]

    logger.debug("Skipping entry that is neither file nor directory: %r", entry)
    return []


async def _read_children(
    entry: FileSystemEntry,
    limiter: asyncio.Semaphore,
) -> list[FileSystemEntry]:
    reader = entry.create_reader()
    children: list[FileSystemEntry] = []
    while True:
        # Released between batches so sibling branches can make progress.
        async with limiter:
            batch = await reader.read_entries()
        if not batch:
            return children
        children.extend(batch)
