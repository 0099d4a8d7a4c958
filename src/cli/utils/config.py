"""CLI configuration resolved from the environment and global options."""
from __future__ import annotations

from dataclasses import dataclass

from grab_rig.config import cfg


@dataclass
class CLIConfig:
    format: str = "text"
    verbose: bool = False


_config: CLIConfig | None = None


def get_config() -> CLIConfig:
    global _config
    if _config is None:
        _config = CLIConfig(format=cfg.output_format)
    return _config


def set_config(config: CLIConfig | None) -> None:
    """Replace the active config (``None`` re-reads the environment on next use)."""
    global _config
    _config = config
