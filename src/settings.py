"""Static configuration for zulip-compose.

All user-editable settings (realm, snapshot, logging) live in a single JSON
file for quick edits without touching Python. Realm values can be overridden
from the environment (or a .env file) so one config serves several accounts.
"""

import json
import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# ZCOMPOSE_CONFIG points at an alternative config file.
CONFIG_PATH = os.getenv("ZCOMPOSE_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Realm the links point into; app.py fails fast when the URL is missing.
# - REALM_URL: base URL, e.g. https://chat.example.com/
# - ZULIP_FEATURE_LEVEL: decides "dm" vs legacy "pm-with" in links
# - SELF_USER_ID: the account's own user id, part of every DM narrow
_realm = _CONFIG.get("realm", {})
REALM_URL = os.getenv("REALM_URL") or _realm.get("url")
ZULIP_FEATURE_LEVEL = int(os.getenv("ZULIP_FEATURE_LEVEL") or _realm.get("zulip_feature_level", 0))
SELF_USER_ID = int(os.getenv("SELF_USER_ID") or _realm.get("self_user_id", 0))

# Snapshot of users, streams and messages used for lookups.
_snapshot = _CONFIG.get("snapshot", {})
SNAPSHOT_PATH = _resolve_path(_snapshot.get("path", "snapshot.json"))

# Mentions drop "|<id>" for unambiguous names only when this is on, since it
# scans the whole user list.
_quote = _CONFIG.get("quote", {})
MENTION_DISAMBIGUATE = bool(_quote.get("mention_disambiguate", False))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
