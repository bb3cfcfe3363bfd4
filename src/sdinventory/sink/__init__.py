"""Tabular output: drive list, item inventory and error log."""

from __future__ import annotations

from .table import SheetTable
from .tables import (
    DRIVE_HEADER,
    ERROR_HEADER,
    NODE_HEADER,
    DriveRow,
    DriveTable,
    ErrorLog,
    ResultSink,
    drive_to_row,
    node_to_row,
)

__all__ = [
    "SheetTable",
    "ResultSink",
    "DriveTable",
    "DriveRow",
    "ErrorLog",
    "DRIVE_HEADER",
    "NODE_HEADER",
    "ERROR_HEADER",
    "drive_to_row",
    "node_to_row",
]
