"""Import a batch of Drive files into local storage."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from filedock.models import DriveFile, ImportSummary
from filedock.service import GoogleDriveService
from filedock.util.mime import exported_file_name

logger = logging.getLogger(__name__)

# Receives (metadata, content, file_name) for each downloaded file.
ImportSink = Callable[[DriveFile, bytes, str], Any]


def import_drive_files(
    service: GoogleDriveService,
    access_token: str,
    file_ids: Sequence[str],
    sink: ImportSink,
) -> ImportSummary:
    """
    Download each file and hand it to sink.

    Files are processed one at a time. A failed download or a sink error
    counts the file as failed and moves on; the batch is never aborted.
    """
    summary = ImportSummary()

    for file_id in file_ids:
        fetched = service.fetch_file(access_token, file_id)
        if fetched is None:
            summary.failed += 1
            summary.errors.append(f"Failed to download file {file_id}")
            continue

        metadata, content, export_mime = fetched
        name = metadata.name or file_id
        if export_mime is not None:
            name = exported_file_name(name, export_mime)

        try:
            sink(metadata, content, name)
        except Exception as exc:
            logger.exception("Failed to store imported file %s", file_id)
            summary.failed += 1
            summary.errors.append(f"Failed to import {name}: {exc}")
            continue

        summary.imported += 1

    logger.info(
        "Imported %d of %d Drive file(s) (%d failed)",
        summary.imported,
        len(file_ids),
        summary.failed,
    )
    return summary
