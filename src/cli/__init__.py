"""Command line interface for the grab-rig tools."""
