"""Checkpoint persistence."""

from __future__ import annotations

from .checkpoint_store import CheckpointStore, KeyValueStore
from .kv_store import JsonFileKeyValueStore

__all__ = ["CheckpointStore", "KeyValueStore", "JsonFileKeyValueStore"]
