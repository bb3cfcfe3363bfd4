import unittest
from datetime import datetime, timezone

from sdinventory.util.time import (
    normalize_dt,
    now_utc,
    parse_rfc3339,
    parse_rfc3339_or_none,
    to_rfc3339,
)


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_normalize_dt_rejects_naive(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dt(datetime(2025, 1, 1, 12, 0, 0))

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123000, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_or_none(self) -> None:
        self.assertIsNone(parse_rfc3339_or_none(None))
        self.assertIsNone(parse_rfc3339_or_none("yesterday"))
        self.assertIsNone(parse_rfc3339_or_none(""))
        self.assertEqual(
            parse_rfc3339_or_none("2024-04-01T00:00:00Z"),
            datetime(2024, 4, 1, tzinfo=timezone.utc),
        )

    def test_to_rfc3339_outputs_z(self) -> None:
        s = to_rfc3339(datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc))
        self.assertEqual(s, "2025-01-01T00:00:00.000000Z")


if __name__ == "__main__":
    unittest.main()
