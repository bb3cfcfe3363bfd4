"""Command-line entry points: `discover` once, then `walk` until every drive is done."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from sdinventory.config import load_config
from sdinventory.manager import InventoryManager

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdinventory",
        description="Inventory shared drives: folders, files and how they are shared.",
    )
    parser.add_argument("--config", required=True, help="Path to the JSON configuration file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("discover", help="List shared drives and reset the inventory")
    sub.add_parser("walk", help="Walk the next unfinished drive for one budget")
    return parser


def main(argv: Optional[Sequence[str]] = None, manager: Optional[InventoryManager] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if manager is None:
        config, auth_info = load_config(args.config)
        manager = InventoryManager(auth_info, config)

    if args.command == "discover":
        drives = manager.discover_drives()
        print(f"Discovered {len(drives)} shared drives")
        return

    result = manager.walk_files()
    if result is None:
        print("All drives are complete")
        return

    stats = result.stats
    print(
        f"{result.drive_id}: {result.state.value}, "
        f"{len(result.nodes)} items this run, "
        f"{stats.total_files} files / {stats.total_folders} folders / "
        f"{stats.total_size_bytes} bytes, "
        f"{stats.external_share_count} externally shared"
    )
