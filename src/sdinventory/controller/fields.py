"""Field definitions for Google Drive API responses."""

from __future__ import annotations

DRIVE_FIELDS: str = "id,name,createdTime,restrictions"

DRIVE_LIST_FIELDS: str = f"nextPageToken,drives({DRIVE_FIELDS})"

ITEM_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "createdTime,"
    "modifiedTime,"
    "size,"
    "owners(emailAddress),"
    "lastModifyingUser(emailAddress,displayName),"
    "webViewLink"
)

CHILDREN_LIST_FIELDS: str = f"nextPageToken,files({ITEM_FIELDS})"

PERMISSION_FIELDS: str = "id,type,role,emailAddress,domain,displayName"

PERMISSION_LIST_FIELDS: str = f"nextPageToken,permissions({PERMISSION_FIELDS})"

ABOUT_FIELDS: str = "user(emailAddress,displayName)"
