"""Upload-side exports: folder trees, entry walking and progress."""

from __future__ import annotations

from .entry_walker import (
    DEFAULT_MAX_CONCURRENCY,
    DirectoryReader,
    FileSystemEntry,
    LocalEntry,
    iter_entry_files,
    walk_entries,
)
from .folder_structure import build_folder_structure, split_relative_path
from .progress import (
    FILES_PROFILE,
    FOLDER_PROFILE,
    ProgressProfile,
    UploadProgressEntry,
    UploadProgressTracker,
    UploadStatus,
    simulate_progress,
)
from .selection import collect_directory, collect_files

__all__ = [
    "build_folder_structure",
    "split_relative_path",
    "collect_files",
    "collect_directory",
    "FileSystemEntry",
    "DirectoryReader",
    "LocalEntry",
    "DEFAULT_MAX_CONCURRENCY",
    "walk_entries",
    "iter_entry_files",
    "UploadStatus",
    "UploadProgressEntry",
    "ProgressProfile",
    "FILES_PROFILE",
    "FOLDER_PROFILE",
    "UploadProgressTracker",
    "simulate_progress",
]
