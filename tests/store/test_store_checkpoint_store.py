import unittest

from sdinventory.errors import CheckpointError, ConflictError
from sdinventory.models import FolderRef, TraversalStats, WalkCheckpoint
from sdinventory.store import CheckpointStore


class MemoryKeyValueStore:
    def __init__(self) -> None:
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class UnreadableKeyValueStore(MemoryKeyValueStore):
    """Behaves like a JSON file store whose file is truncated until deleted."""

    def __init__(self) -> None:
        super().__init__()
        self.damaged = True

    def get(self, key):
        if self.damaged:
            raise CheckpointError("Key-value store is not valid JSON")
        return super().get(key)

    def delete(self, key):
        self.damaged = False
        super().delete(key)


def _checkpoint(drive_id: str) -> WalkCheckpoint:
    return WalkCheckpoint(
        drive_id=drive_id,
        current=FolderRef(id="F1", path="/Docs/", depth=1),
        page_token="tok",
        page_offset=3,
        pending=[FolderRef(id="F2", path="/Other/", depth=1)],
        visited_folder_ids={drive_id, "F1", "F2"},
        stats=TraversalStats(total_files=4, total_folders=2, total_size_bytes=99),
        items_written=6,
    )


class TestCheckpointStore(unittest.TestCase):
    def setUp(self) -> None:
        self.kv = MemoryKeyValueStore()
        self.store = CheckpointStore(self.kv)

    def test_empty_slot(self) -> None:
        self.assertIsNone(self.store.load())
        self.assertIsNone(self.store.peek_drive_id())

    def test_save_load_clear(self) -> None:
        cp = _checkpoint("D1")
        self.store.save("D1", cp)

        self.assertEqual(self.store.load(), cp)
        self.assertEqual(self.store.peek_drive_id(), "D1")

        self.store.clear()
        self.assertIsNone(self.store.load())

    def test_same_drive_overwrites(self) -> None:
        self.store.save("D1", _checkpoint("D1"))
        newer = _checkpoint("D1")
        newer.page_offset = 4
        self.store.save("D1", newer)

        self.assertEqual(self.store.load().page_offset, 4)

    def test_other_live_drive_conflicts(self) -> None:
        self.store.save("D1", _checkpoint("D1"))

        with self.assertRaises(ConflictError):
            self.store.save("D2", _checkpoint("D2"))
        self.assertEqual(self.store.peek_drive_id(), "D1")

    def test_mismatched_checkpoint_conflicts(self) -> None:
        with self.assertRaises(ConflictError):
            self.store.save("D1", _checkpoint("D2"))

    def test_corrupt_payload(self) -> None:
        self.kv.set(CheckpointStore.DEFAULT_KEY, '{"version": 1, "drive_id": "D9", "current": 5}')

        with self.assertRaises(CheckpointError):
            self.store.load()
        self.assertEqual(self.store.peek_drive_id(), "D9")

    def test_garbage_payload(self) -> None:
        self.kv.set(CheckpointStore.DEFAULT_KEY, "%%%")

        with self.assertRaises(CheckpointError):
            self.store.load()
        self.assertIsNone(self.store.peek_drive_id())

    def test_unreadable_store(self) -> None:
        kv = UnreadableKeyValueStore()
        store = CheckpointStore(kv)

        self.assertIsNone(store.peek_drive_id())
        with self.assertRaises(CheckpointError):
            store.load()

        store.clear()
        self.assertIsNone(store.load())

    def test_custom_key(self) -> None:
        store = CheckpointStore(self.kv, key="other")
        store.save("D1", _checkpoint("D1"))

        self.assertIn("other", self.kv.data)
        self.assertIsNone(self.store.load())


if __name__ == "__main__":
    unittest.main()
