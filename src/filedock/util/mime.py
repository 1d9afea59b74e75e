from __future__ import annotations

from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"

GOOGLE_APP_PREFIX: str = "application/vnd.google-apps."

# Google Workspace types that can be exported, and the format each becomes.
EXPORT_MIME_TYPES: dict[str, str] = {
    "application/vnd.google-apps.document": "application/pdf",
    "application/vnd.google-apps.spreadsheet": (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    ),
    "application/vnd.google-apps.presentation": (
        "application/vnd.openxmlformats-officedocument.presentationml.presentation"
    ),
    "application/vnd.google-apps.drawing": "image/png",
}

EXPORT_EXTENSIONS: dict[str, str] = {
    "application/pdf": ".pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": ".pptx",
    "image/png": ".png",
}


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Returns True if the MIME type is a Google Workspace ('apps') type."""
    return mime_type.startswith(GOOGLE_APP_PREFIX)


def export_mime_for(mime_type: str) -> Optional[str]:
    """Return the export target for a Workspace type, or None if unmapped."""
    return EXPORT_MIME_TYPES.get(mime_type)


def exported_file_name(name: str, export_mime: str) -> str:
    """
    Append the export format's extension to a Workspace document name.

    "Budget" exported as XLSX becomes "Budget.xlsx"; a name that already
    carries the extension is left alone.
    """
    ext = EXPORT_EXTENSIONS.get(export_mime, "")
    if not ext or name.lower().endswith(ext):
        return name
    return name + ext
