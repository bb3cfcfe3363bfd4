from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"


def is_folder(mime_type: str) -> bool:
    """
    Return True for Drive folders.

    Shortcuts to folders carry their own MIME type and are therefore treated as
    plain items; the walker never follows them.
    """
    return mime_type == FOLDER_MIME
