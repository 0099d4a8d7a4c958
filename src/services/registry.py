"""Tool registry: tools declare themselves with ``@grab_rig_tool`` and the server
registers everything collected here at startup."""
from __future__ import annotations

from typing import Any, Callable

_tool_registry: list[dict[str, Any]] = []


def grab_rig_tool(
    name: str | None = None,
    description: str | None = None,
    **kwargs: Any,
) -> Callable:
    """Record the decorated function as an MCP tool.

    Extra keyword arguments (e.g. ``annotations``) are passed through to
    ``FastMCP.tool`` unchanged. The function itself is returned as-is.
    """
    def decorator(func: Callable) -> Callable:
        _tool_registry.append({
            "func": func,
            "name": name or func.__name__,
            "description": description,
            "kwargs": kwargs,
        })
        return func

    return decorator


def get_registered_tools() -> list[dict[str, Any]]:
    return list(_tool_registry)
