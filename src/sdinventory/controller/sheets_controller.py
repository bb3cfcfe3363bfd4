"""Google Sheets API controller (internal use only)."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from sdinventory.auth import AuthInfo, OAuthClient

from ._base import _ApiController, _RetryPolicy


def _a1(title: str, cell: str = "") -> str:
    quoted = "'" + title.replace("'", "''") + "'"
    return f"{quoted}!{cell}" if cell else quoted


class SheetsController(_ApiController):
    """Minimal value-level access to one spreadsheet's tabs."""

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/spreadsheets",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        self._retry_policy = _RetryPolicy()
        self._call_delay_sec = 0.0

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        self._service = client.build_sheets_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(cls, service: Any) -> "SheetsController":
        """Create controller from a pre-built Sheets service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy()
        obj._call_delay_sec = 0.0
        obj._service = service
        return obj

    def sheet_titles(self, spreadsheet_id: str) -> list[str]:
        req = self._service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            fields="sheets.properties.title",
        )
        data = self._execute(req.execute)
        titles: list[str] = []
        for sheet in data.get("sheets", []):
            title = (sheet.get("properties") or {}).get("title")
            if isinstance(title, str):
                titles.append(title)
        return titles

    def add_sheet(self, spreadsheet_id: str, title: str) -> None:
        body = {"requests": [{"addSheet": {"properties": {"title": title}}}]}
        req = self._service.spreadsheets().batchUpdate(
            spreadsheetId=spreadsheet_id,
            body=body,
        )
        self._execute(req.execute)

    def ensure_sheet(self, spreadsheet_id: str, title: str) -> bool:
        """Create the tab if missing. Returns True when it was created."""
        if title in self.sheet_titles(spreadsheet_id):
            return False
        self.add_sheet(spreadsheet_id, title)
        return True

    def clear(self, spreadsheet_id: str, title: str) -> None:
        req = self._service.spreadsheets().values().clear(
            spreadsheetId=spreadsheet_id,
            range=_a1(title),
            body={},
        )
        self._execute(req.execute)

    def write_rows(
        self,
        spreadsheet_id: str,
        title: str,
        start_row: int,
        rows: Sequence[Sequence[Any]],
    ) -> None:
        """Write rows starting at 1-based row start_row, column A."""
        if not rows:
            return
        req = self._service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=_a1(title, f"A{start_row}"),
            valueInputOption="RAW",
            body={"values": [list(r) for r in rows]},
        )
        self._execute(req.execute)

    def append_rows(
        self,
        spreadsheet_id: str,
        title: str,
        rows: Sequence[Sequence[Any]],
    ) -> None:
        """Insert rows after the last row of the tab's data table."""
        if not rows:
            return
        req = self._service.spreadsheets().values().append(
            spreadsheetId=spreadsheet_id,
            range=_a1(title, "A1"),
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": [list(r) for r in rows]},
        )
        self._execute(req.execute)

    def read_values(self, spreadsheet_id: str, title: str, cells: str = "") -> list[list[str]]:
        """
        Non-empty rows of a tab, as formatted strings.

        cells narrows the read to an A1 range inside the tab (e.g. "1:1" or
        "A2:B"); the whole tab is read when it is empty.
        """
        req = self._service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=_a1(title, cells),
        )
        data = self._execute(req.execute)
        values = data.get("values", [])
        return [[str(cell) for cell in row] for row in values if isinstance(row, list)]
