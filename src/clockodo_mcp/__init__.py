"""Clockodo time tracking tools for MCP clients."""

__version__ = "1.0.0"
