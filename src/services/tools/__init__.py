"""MCP tools. Importing this package registers every tool module."""
from __future__ import annotations

import importlib
import logging
import pkgutil

logger = logging.getLogger("grab-rig")


def register_all_tools() -> list[str]:
    """Import every module in this package so their decorators run."""
    loaded = []
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name.startswith("_") or module_info.name == "utils":
            continue
        importlib.import_module(f"{__name__}.{module_info.name}")
        loaded.append(module_info.name)
    logger.debug("Loaded tool modules: %s", ", ".join(loaded))
    return loaded
