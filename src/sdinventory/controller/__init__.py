"""Internal controller exports for sdinventory."""

from __future__ import annotations

from .drive_controller import DriveController
from .sheets_controller import SheetsController

__all__ = ["DriveController", "SheetsController"]
