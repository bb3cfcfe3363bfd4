import unittest

from sdinventory.models import TraversalStats


class TestTraversalStats(unittest.TestCase):
    def test_accumulates(self) -> None:
        stats = TraversalStats()
        stats.add_file(1024)
        stats.add_file(2048)
        stats.add_folder()
        stats.add_external()

        self.assertEqual(
            stats.to_dict(),
            {
                "total_files": 2,
                "total_folders": 1,
                "total_size_bytes": 3072,
                "external_share_count": 1,
            },
        )

    def test_copy_is_independent(self) -> None:
        stats = TraversalStats(total_files=1)
        clone = stats.copy()
        clone.add_file(5)

        self.assertEqual(stats.total_files, 1)
        self.assertEqual(clone.total_files, 2)

    def test_from_dict_defaults_missing_counters(self) -> None:
        self.assertEqual(TraversalStats.from_dict({"total_files": 3}), TraversalStats(total_files=3))

    def test_from_dict_rejects_bad_counters(self) -> None:
        for bad in ({"total_files": -1}, {"total_folders": "2"}, {"total_size_bytes": True}):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    TraversalStats.from_dict(bad)


if __name__ == "__main__":
    unittest.main()
