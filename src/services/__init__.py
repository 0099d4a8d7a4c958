"""MCP-facing services for the grab-rig tools."""
