"""Upload selected files, folders and dropped entries to the server."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from filedock.api import FileDockClient
from filedock.config import get_settings
from filedock.errors import FileDockError
from filedock.models import Notification, UploadFile
from filedock.notifications import upload_notification
from filedock.upload import (
    FILES_PROFILE,
    FOLDER_PROFILE,
    FileSystemEntry,
    UploadProgressTracker,
    build_folder_structure,
    simulate_progress,
    walk_entries,
)

logger = logging.getLogger(__name__)


async def upload_files(
    client: FileDockClient,
    files: Sequence[UploadFile],
    *,
    tracker: Optional[UploadProgressTracker] = None,
) -> Notification:
    """Upload loose files in one multipart request."""
    tracker = tracker or UploadProgressTracker(FILES_PROFILE)
    tracker.start(f.name for f in files)
    try:
        await simulate_progress(tracker, client.upload_files(files))
    except (FileDockError, OSError):
        logger.exception("Upload error")
        return upload_notification(folder=False, success=False)
    return upload_notification(folder=False, success=True)


async def upload_folder(
    client: FileDockClient,
    files: Sequence[UploadFile],
    *,
    tracker: Optional[UploadProgressTracker] = None,
) -> Notification:
    """Upload files together with the folder tree rebuilt from their paths."""
    tracker = tracker or UploadProgressTracker(FOLDER_PROFILE)
    try:
        structure = build_folder_structure(files)
        tracker.start(f.relative_path or f.name for f in files)
        await simulate_progress(tracker, client.upload_folder(files, structure))
    except (FileDockError, OSError):
        logger.exception("Folder upload error")
        return upload_notification(folder=True, success=False)
    return upload_notification(folder=True, success=True)


async def upload_dropped(
    client: FileDockClient,
    entries: Sequence[Optional[FileSystemEntry]],
    *,
    max_concurrency: Optional[int] = None,
    tracker: Optional[UploadProgressTracker] = None,
) -> Optional[Notification]:
    """
    Walk dropped entries and upload what they contain as a folder.

    Returns None when the drop held no files.
    """
    limit = max_concurrency or get_settings().walker_max_concurrency
    try:
        files = await walk_entries(entries, max_concurrency=limit)
    except (FileDockError, OSError):
        logger.exception("Failed to read dropped entries")
        return upload_notification(folder=True, success=False)

    if not files:
        return None
    return await upload_folder(client, files, tracker=tracker)
