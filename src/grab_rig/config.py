"""Centralized configuration for the grab-rig tools.

Loads settings from a .env file (if present) next to this module, then
falls back to environment variables, then to hardcoded defaults.

Usage in other modules:
    from grab_rig.config import cfg

    indent = cfg.json_indent
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# .env loader (no dependency on python-dotenv)
# ---------------------------------------------------------------------------

_ENV_DIR = Path(__file__).resolve().parent

LOG_FORMAT = "%(name)s %(levelname)s: %(message)s"


def _load_dotenv(directory: Path = _ENV_DIR) -> None:
    """Parse a .env file and inject values into os.environ.

    Only sets a variable if it is NOT already present in the environment,
    so real env vars always win.
    """
    env_file = directory / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip().strip("'\"")
        if key and key not in os.environ:
            os.environ[key] = value


_load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------

class _Config:
    """Read-only configuration object. All values resolve at access time so
    they pick up any later changes to os.environ."""

    @property
    def log_level(self) -> str:
        return os.environ.get("GRAB_RIG_LOG_LEVEL", "INFO").upper()

    @property
    def json_indent(self) -> int:
        val = os.environ.get("GRAB_RIG_JSON_INDENT", "2")
        try:
            return max(0, int(val))
        except ValueError:
            return 2

    @property
    def backup_on_save(self) -> bool:
        """Copy the previous template to ``<name>.bak`` before overwriting it."""
        return _env_flag("GRAB_RIG_BACKUP_ON_SAVE")

    @property
    def output_format(self) -> str:
        fmt = os.environ.get("GRAB_RIG_FORMAT", "text").lower()
        return fmt if fmt in ("text", "json") else "text"


cfg = _Config()


def configure_logging(level: str | int | None = None) -> None:
    logging.basicConfig(level=level or cfg.log_level, format=LOG_FORMAT)
