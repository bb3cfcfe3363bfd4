from .mime import FOLDER_MIME, is_folder
from .time import now_utc, normalize_dt, parse_rfc3339, parse_rfc3339_or_none, to_rfc3339

__all__ = [
    "FOLDER_MIME",
    "is_folder",
    "now_utc",
    "parse_rfc3339",
    "parse_rfc3339_or_none",
    "to_rfc3339",
    "normalize_dt",
]
