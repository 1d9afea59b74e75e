"""Public model exports for filedock."""

from __future__ import annotations

from .drive_file import DriveFile, FilePage
from .folder_node import FolderFile, FolderNode, UploadFile
from .results import AuthUrl, ImportSummary, Notification, TokenExchangeResult

__all__ = [
    "DriveFile",
    "FilePage",
    "UploadFile",
    "FolderFile",
    "FolderNode",
    "AuthUrl",
    "TokenExchangeResult",
    "ImportSummary",
    "Notification",
]
