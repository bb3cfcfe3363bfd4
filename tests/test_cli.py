import contextlib
import io
import unittest
from unittest.mock import Mock

from sdinventory.cli import build_parser, main
from sdinventory.models import Drive, TraversalStats, WalkResult, WalkState


class TestCli(unittest.TestCase):
    def _run(self, argv, manager) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(argv, manager=manager)
        return out.getvalue()

    def test_parser_requires_command(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            build_parser().parse_args(["--config", "c.json"])

    def test_discover(self) -> None:
        manager = Mock()
        manager.discover_drives.return_value = [Drive(id="D1", name="Sales")]

        output = self._run(["--config", "c.json", "discover"], manager)

        manager.discover_drives.assert_called_once_with()
        self.assertIn("Discovered 1 shared drives", output)

    def test_walk_prints_summary(self) -> None:
        manager = Mock()
        manager.walk_files.return_value = WalkResult(
            drive_id="D1",
            state=WalkState.SUSPENDED,
            nodes=[],
            stats=TraversalStats(total_files=2, total_folders=1, total_size_bytes=3072),
        )

        output = self._run(["--config", "c.json", "--log-level", "WARNING", "walk"], manager)

        self.assertIn("D1: suspended", output)
        self.assertIn("2 files / 1 folders / 3072 bytes", output)

    def test_walk_when_everything_is_done(self) -> None:
        manager = Mock()
        manager.walk_files.return_value = None

        self.assertIn("All drives are complete", self._run(["--config", "c.json", "walk"], manager))


if __name__ == "__main__":
    unittest.main()
