"""Resumable drive traversal."""

from __future__ import annotations

from .cursor import Page, PaginationCursor
from .tree_walker import DEFAULT_MAX_DEPTH, TreeWalker

__all__ = ["Page", "PaginationCursor", "TreeWalker", "DEFAULT_MAX_DEPTH"]
