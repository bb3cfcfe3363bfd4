import json
import os
import tempfile
import unittest

from sdinventory.config import InventoryConfig, load_config
from sdinventory.errors import ConfigError, InvalidArgumentError

BASE = {
    "spreadsheet_id": "SHEET",
    "company_domains": ["Acme.co.jp", "acme.co.jp", " acme-group.com "],
    "checkpoint_file": "state/checkpoint.json",
}


class TestInventoryConfig(unittest.TestCase):
    def test_defaults_and_normalization(self) -> None:
        config = InventoryConfig.from_dict(dict(BASE, allowed_users=["Admin@Acme.co.jp"]))

        self.assertEqual(config.company_domains, ("acme.co.jp", "acme-group.com"))
        self.assertEqual(config.allowed_users, ("admin@acme.co.jp",))
        self.assertEqual(config.max_depth, 10)
        self.assertEqual(config.item_budget, 500)
        self.assertIsNone(config.time_budget_sec)
        self.assertEqual(
            (config.drives_sheet, config.files_sheet, config.errors_sheet),
            ("Drives", "Files", "Errors"),
        )

    def test_invalid_values(self) -> None:
        bad = [
            {"spreadsheet_id": ""},
            {"company_domains": []},
            {"company_domains": "acme.co.jp"},
            {"max_depth": -1},
            {"item_budget": 0},
            {"time_budget_sec": 0},
            {"call_delay_sec": -0.5},
            {"files_sheet": "Drives"},
        ]
        for override in bad:
            with self.subTest(override=override):
                with self.assertRaises(ConfigError):
                    InventoryConfig.from_dict(dict(BASE, **override))

    def test_config_error_is_invalid_argument(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            InventoryConfig.from_dict(dict(BASE, max_depth=-1))

    def test_unknown_and_missing_keys(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            InventoryConfig.from_dict(dict(BASE, colour="blue"))
        self.assertEqual(ctx.exception.details["keys"], ["colour"])

        with self.assertRaises(ConfigError):
            InventoryConfig.from_dict({"spreadsheet_id": "SHEET"})


class TestLoadConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "inventory.json")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, payload) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f)

    def test_load(self) -> None:
        self._write(
            {
                "auth": {
                    "kind": "service_account",
                    "data": {"service_account_file": "sa.json", "subject": "admin@acme.co.jp"},
                },
                "inventory": dict(BASE, item_budget=100),
            }
        )

        config, auth_info = load_config(self.path)

        self.assertEqual(config.item_budget, 100)
        self.assertEqual(auth_info.kind, "service_account")
        self.assertEqual(auth_info.subject, "admin@acme.co.jp")

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_bad_auth_section(self) -> None:
        self._write({"auth": {"kind": "oauth", "data": {}}, "inventory": BASE})
        with self.assertRaises(ConfigError):
            load_config(self.path)

        self._write({"inventory": BASE})
        with self.assertRaises(ConfigError):
            load_config(self.path)


if __name__ == "__main__":
    unittest.main()
