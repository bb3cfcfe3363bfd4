"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sdinventory.auth import AuthInfo, OAuthClient
from sdinventory.models import AccessEntry, Drive, DriveItem, PrincipalType, Role
from sdinventory.util.time import parse_rfc3339_or_none

from ._base import _ApiController, _RetryPolicy
from .fields import (
    ABOUT_FIELDS,
    CHILDREN_LIST_FIELDS,
    DRIVE_LIST_FIELDS,
    PERMISSION_LIST_FIELDS,
)

logger = logging.getLogger(__name__)


class DriveController(_ApiController):
    """
    Read-only Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - Every request sleeps call_delay_sec first to stay under the API's
          per-user rate limits; requests are issued one at a time.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive.readonly",)
    DEFAULT_PAGE_SIZE: int = 100

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        call_delay_sec: float = 0.1,
    ) -> None:
        self._retry_policy = _RetryPolicy()
        self._call_delay_sec = call_delay_sec

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        call_delay_sec: float = 0.0,
    ) -> "DriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy()
        obj._call_delay_sec = call_delay_sec
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def current_user_email(self) -> Optional[str]:
        """Email address of the principal the service is authorized as."""
        req = self._service.about().get(fields=ABOUT_FIELDS)
        data = self._execute(req.execute)
        email = (data.get("user") or {}).get("emailAddress")
        return email if isinstance(email, str) else None

    def list_drives(self) -> list[Drive]:
        drives: list[Drive] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.drives().list(
                fields=DRIVE_LIST_FIELDS,
                pageSize=100,
                pageToken=page_token,
            )
            data = self._execute(req.execute)
            for d in data.get("drives", []):
                drive = _drive_dict_to_drive(d)
                if drive is not None:
                    drives.append(drive)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Listed %d shared drives", len(drives))
        return drives

    def list_children_page(
        self,
        folder_id: str,
        drive_id: str,
        *,
        page_token: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> tuple[list[DriveItem], Optional[str]]:
        """
        Fetch one page of the non-trashed direct children of folder_id.

        Returns:
            (items, next_page_token); next_page_token is None on the last page.
        """
        req = self._service.files().list(
            q=_build_parent_query(folder_id),
            corpora="drive",
            driveId=drive_id,
            includeItemsFromAllDrives=True,
            supportsAllDrives=True,
            orderBy="folder,name",
            pageSize=page_size or self.DEFAULT_PAGE_SIZE,
            pageToken=page_token,
            fields=CHILDREN_LIST_FIELDS,
        )
        data = self._execute(req.execute)

        items: list[DriveItem] = []
        for f in data.get("files", []):
            item = _file_dict_to_item(f)
            if item is not None:
                items.append(item)

        next_token = data.get("nextPageToken")
        return items, next_token if isinstance(next_token, str) and next_token else None

    def list_permissions(self, resource_id: str) -> list[AccessEntry]:
        """All access entries on a drive or an item (follows pagination)."""
        entries: list[AccessEntry] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.permissions().list(
                fileId=resource_id,
                supportsAllDrives=True,
                pageToken=page_token,
                fields=PERMISSION_LIST_FIELDS,
            )
            data = self._execute(req.execute)
            for p in data.get("permissions", []):
                entry = _permission_dict_to_entry(p)
                if entry is not None:
                    entries.append(entry)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return entries


def _build_parent_query(folder_id: str) -> str:
    return f"'{folder_id}' in parents and trashed=false"


def _drive_dict_to_drive(data: dict[str, Any]) -> Optional[Drive]:
    drive_id = data.get("id")
    if not isinstance(drive_id, str) or not drive_id:
        return None

    name = data.get("name")
    restrictions_raw = data.get("restrictions") or {}
    restrictions = {
        str(k): bool(v)
        for k, v in restrictions_raw.items()
        if isinstance(v, bool)
    } if isinstance(restrictions_raw, dict) else {}

    return Drive(
        id=drive_id,
        name=name if isinstance(name, str) else "",
        created_at=parse_rfc3339_or_none(data.get("createdTime")),
        restrictions=restrictions,
    )


def _file_dict_to_item(data: dict[str, Any]) -> Optional[DriveItem]:
    file_id = data.get("id")
    if not isinstance(file_id, str) or not file_id:
        return None

    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int) and not isinstance(data.get("size"), bool):
        size = data["size"]

    creator = None
    owners = data.get("owners") or []
    if owners and isinstance(owners[0], dict):
        creator = owners[0].get("emailAddress")
    if not isinstance(creator, str):
        modifier = data.get("lastModifyingUser") or {}
        creator = modifier.get("emailAddress") or modifier.get("displayName")

    link = data.get("webViewLink")

    return DriveItem(
        id=file_id,
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=tuple(parents) if isinstance(parents, list) else (),
        created_time=parse_rfc3339_or_none(data.get("createdTime")),
        modified_time=parse_rfc3339_or_none(data.get("modifiedTime")),
        size=size,
        creator=creator if isinstance(creator, str) else None,
        web_view_link=link if isinstance(link, str) else None,
    )


def _permission_dict_to_entry(data: dict[str, Any]) -> Optional[AccessEntry]:
    try:
        principal_type = PrincipalType(data.get("type"))
    except ValueError:
        logger.debug("Ignoring permission with unknown type: %r", data.get("type"))
        return None

    def _str(key: str) -> Optional[str]:
        value = data.get(key)
        return value if isinstance(value, str) and value.strip() else None

    return AccessEntry(
        principal_type=principal_type,
        role=Role.parse(data.get("role")),
        email=_str("emailAddress"),
        display_name=_str("displayName"),
        domain=_str("domain"),
    )
