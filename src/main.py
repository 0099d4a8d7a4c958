"""MCP server exposing the grab-rig tools over stdio."""
from __future__ import annotations

import logging

from fastmcp import FastMCP

from grab_rig.config import configure_logging
from services.registry import get_registered_tools
from services.tools import register_all_tools

logger = logging.getLogger("grab-rig")


def create_mcp_server() -> FastMCP:
    mcp = FastMCP(
        name="grab-rig",
        instructions="Tools for reconciling grab interaction rigs on template hierarchies.",
    )
    register_all_tools()
    for tool in get_registered_tools():
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
            **tool["kwargs"],
        )(tool["func"])
        logger.debug("Registered tool %s", tool["name"])
    return mcp


def main() -> None:
    configure_logging()
    create_mcp_server().run()


if __name__ == "__main__":
    main()
