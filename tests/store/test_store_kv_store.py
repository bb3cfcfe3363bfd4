import json
import os
import tempfile
import unittest

from sdinventory.errors import CheckpointError, InvalidArgumentError
from sdinventory.store import JsonFileKeyValueStore


class TestJsonFileKeyValueStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "state", "kv.json")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertIsNone(JsonFileKeyValueStore(self.path).get("k"))

    def test_set_get_delete_persist_across_instances(self) -> None:
        JsonFileKeyValueStore(self.path).set("k", "v")

        other = JsonFileKeyValueStore(self.path)
        self.assertEqual(other.get("k"), "v")

        other.delete("k")
        self.assertIsNone(JsonFileKeyValueStore(self.path).get("k"))
        other.delete("k")

    def test_no_temporary_files_left_behind(self) -> None:
        store = JsonFileKeyValueStore(self.path)
        store.set("a", "1")
        store.set("b", "2")

        self.assertEqual(os.listdir(os.path.dirname(self.path)), ["kv.json"])

    def test_non_string_value_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            JsonFileKeyValueStore(self.path).set("k", 1)

    def _write_raw(self, text: str) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_unreadable_file_raises(self) -> None:
        self._write_raw("{not json")

        with self.assertRaises(CheckpointError):
            JsonFileKeyValueStore(self.path).get("k")

    def test_non_object_file_raises(self) -> None:
        self._write_raw(json.dumps(["a"]))

        with self.assertRaises(CheckpointError):
            JsonFileKeyValueStore(self.path).get("k")

    def test_delete_discards_truncated_file(self) -> None:
        self._write_raw('{"walk_checkpoint": "{\\"drive_id')
        store = JsonFileKeyValueStore(self.path)

        store.delete("walk_checkpoint")

        self.assertFalse(os.path.exists(self.path))
        self.assertIsNone(store.get("walk_checkpoint"))
        store.set("k", "v")
        self.assertEqual(store.get("k"), "v")

    def test_reset_missing_file(self) -> None:
        JsonFileKeyValueStore(self.path).reset()
        self.assertFalse(os.path.exists(self.path))

    def test_blank_path_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            JsonFileKeyValueStore("  ")


if __name__ == "__main__":
    unittest.main()
