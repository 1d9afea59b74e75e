from .mime import (
    EXPORT_MIME_TYPES,
    FOLDER_MIME,
    export_mime_for,
    exported_file_name,
    is_folder,
    is_google_app,
)
from .time import normalize_dt, now_millis, now_utc, parse_rfc3339, to_rfc3339

__all__ = [
    "FOLDER_MIME",
    "EXPORT_MIME_TYPES",
    "is_folder",
    "is_google_app",
    "export_mime_for",
    "exported_file_name",
    "now_utc",
    "now_millis",
    "parse_rfc3339",
    "to_rfc3339",
    "normalize_dt",
]
