"""Internal controller exports for filedock."""

from __future__ import annotations

from .drive_controller import ROOT_FOLDER_ID, GoogleDriveController, escape_query_literal

__all__ = ["GoogleDriveController", "ROOT_FOLDER_ID", "escape_query_literal"]
