"""Run configuration for sdinventory."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Optional

from sdinventory.auth import AuthInfo
from sdinventory.errors import ConfigError


def _lower_tuple(values: Any, name: str) -> tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ConfigError(f"{name} must be a list of strings")
    out: list[str] = []
    for v in values:
        if not isinstance(v, str):
            raise ConfigError(f"{name} must be a list of strings")
        v = v.strip().lower()
        if v and v not in out:
            out.append(v)
    return tuple(out)


@dataclass(slots=True, frozen=True)
class InventoryConfig:
    """
    Settings for discovery and walk invocations.

    Notes:
        - allowed_users may be empty, in which case nobody is allowed.
        - item_budget / time_budget_sec bound one walk invocation; at least
          one of them should be set when the host enforces a time limit.
    """

    spreadsheet_id: str
    company_domains: tuple[str, ...]
    checkpoint_file: str
    allowed_users: tuple[str, ...] = ()

    max_depth: int = 10
    item_budget: Optional[int] = 500
    time_budget_sec: Optional[float] = None
    call_delay_sec: float = 0.1

    drives_sheet: str = "Drives"
    files_sheet: str = "Files"
    errors_sheet: str = "Errors"

    def __post_init__(self) -> None:
        for key in ("spreadsheet_id", "checkpoint_file", "drives_sheet", "files_sheet", "errors_sheet"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{key} must be a non-empty string")

        # frozen: normalize through object.__setattr__
        object.__setattr__(
            self, "company_domains", _lower_tuple(self.company_domains, "company_domains")
        )
        object.__setattr__(self, "allowed_users", _lower_tuple(self.allowed_users, "allowed_users"))
        if not self.company_domains:
            raise ConfigError("company_domains must list at least one domain")

        if not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ConfigError("max_depth must be an integer >= 0")
        if self.item_budget is not None and (
            not isinstance(self.item_budget, int) or self.item_budget < 1
        ):
            raise ConfigError("item_budget must be an integer >= 1 or null")
        if self.time_budget_sec is not None and (
            not isinstance(self.time_budget_sec, (int, float)) or self.time_budget_sec <= 0
        ):
            raise ConfigError("time_budget_sec must be a number > 0 or null")
        if not isinstance(self.call_delay_sec, (int, float)) or self.call_delay_sec < 0:
            raise ConfigError("call_delay_sec must be a number >= 0")

        titles = {self.drives_sheet, self.files_sheet, self.errors_sheet}
        if len(titles) != 3:
            raise ConfigError("drives_sheet, files_sheet and errors_sheet must differ")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryConfig":
        """Build from a plain dict. Unknown keys are rejected."""
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError("Unknown configuration keys", details={"keys": unknown})
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigError("Missing configuration keys", details={"error": str(exc)}, cause=exc) from exc


def load_config(path: str) -> tuple[InventoryConfig, AuthInfo]:
    """
    Read a JSON configuration file.

    Layout:
        {"auth": {"kind": "oauth", "data": {...}}, "inventory": {...}}
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigError("Failed to read configuration file", details={"path": path}, cause=exc) from exc

    if not isinstance(raw, dict):
        raise ConfigError("configuration must be a JSON object", details={"path": path})

    auth_raw = raw.get("auth")
    if not isinstance(auth_raw, dict):
        raise ConfigError("configuration needs an 'auth' object", details={"path": path})
    try:
        auth_info = AuthInfo(kind=auth_raw.get("kind", ""), data=auth_raw.get("data") or {})
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc), details={"path": path}, cause=exc) from exc

    config = InventoryConfig.from_dict(raw.get("inventory") or {})
    return config, auth_info
