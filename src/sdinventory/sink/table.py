"""Append-oriented access to one spreadsheet tab."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


def column_letter(number: int) -> str:
    """1-based column number to its A1 letters (1 -> A, 27 -> AA)."""
    if number < 1:
        raise ValueError("column number must be >= 1")
    letters = ""
    while number:
        number, rem = divmod(number - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


class SheetTable:
    """
    One tab of the output spreadsheet with a fixed header row.

    Row numbers are 1-based spreadsheet rows; row 1 is the header and data
    starts at row 2.
    """

    def __init__(
        self,
        controller,
        spreadsheet_id: str,
        title: str,
        header: Sequence[str],
    ) -> None:
        self._controller = controller
        self._spreadsheet_id = spreadsheet_id
        self.title = title
        self.header = list(header)

    def ensure(self) -> None:
        """Create the tab and its header row unless they already exist."""
        created = self._controller.ensure_sheet(self._spreadsheet_id, self.title)
        if created or not self._controller.read_values(self._spreadsheet_id, self.title, "1:1"):
            self._controller.write_rows(self._spreadsheet_id, self.title, 1, [self.header])
            logger.info("Initialized sheet %r", self.title)

    def recreate(self) -> None:
        """Drop every row and start again from the header."""
        self._controller.ensure_sheet(self._spreadsheet_id, self.title)
        self._controller.clear(self._spreadsheet_id, self.title)
        self._controller.write_rows(self._spreadsheet_id, self.title, 1, [self.header])
        logger.info("Recreated sheet %r", self.title)

    def rows(self, columns: Optional[int] = None) -> list[list[str]]:
        """Data rows, header excluded; only the first `columns` columns if given."""
        if columns is None:
            return self._controller.read_values(self._spreadsheet_id, self.title)[1:]
        cells = f"A2:{column_letter(columns)}"
        return self._controller.read_values(self._spreadsheet_id, self.title, cells)

    def append(self, rows: Sequence[Sequence[Any]]) -> int:
        """Insert rows after the last data row. Returns the number of rows written."""
        if rows:
            self._controller.append_rows(self._spreadsheet_id, self.title, rows)
            logger.debug("Appended %d rows to %r", len(rows), self.title)
        return len(rows)

    def update_row(self, row_number: int, values: Sequence[Any]) -> None:
        if row_number < 2:
            raise ValueError("row_number must point at a data row (>= 2)")
        self._controller.write_rows(self._spreadsheet_id, self.title, row_number, [values])
