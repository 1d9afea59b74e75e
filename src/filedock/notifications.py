"""User-facing notifications, one per completed operation."""

from __future__ import annotations

from typing import Optional

from filedock.models import ImportSummary, Notification


def import_notification(summary: ImportSummary) -> Optional[Notification]:
    """
    Summarize an import in a single notification.

    Partial failures are folded into the success message; None is returned
    for an empty batch.
    """
    if summary.imported > 0:
        description = (
            f"Successfully imported {summary.imported} file(s) from Google Drive"
        )
        if summary.failed > 0:
            description += f". {summary.failed} file(s) failed to import."
        return Notification(title="Import Successful", description=description)

    if summary.failed > 0:
        return Notification(
            title="Import Failed",
            description=f"Failed to import {summary.failed} file(s). Please try again.",
            variant="destructive",
        )

    return None


def import_error_notification(error: BaseException) -> Notification:
    message = str(error) or "Failed to import files from Google Drive"
    return Notification(title="Import Failed", description=message, variant="destructive")


def upload_notification(*, folder: bool, success: bool) -> Notification:
    if folder:
        if success:
            return Notification(
                title="Folder Upload Successful",
                description="Folder has been uploaded and organized with AI analysis",
            )
        return Notification(
            title="Folder Upload Failed",
            description="Failed to upload folder. Please try again.",
            variant="destructive",
        )

    if success:
        return Notification(
            title="Upload Successful",
            description="Files have been uploaded and processed with AI tagging",
        )
    return Notification(
        title="Upload Failed",
        description="Failed to upload files. Please try again.",
        variant="destructive",
    )
