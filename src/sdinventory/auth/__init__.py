"""Public auth exports for sdinventory."""

from __future__ import annotations

from .allow_list import ensure_allowed
from .auth_info import AuthInfo
from .oauth_client import OAuthClient

__all__ = ["AuthInfo", "OAuthClient", "ensure_allowed"]
