"""
Tool implementations: entries, clock, reference.

Each function takes the shared ClockodoClient and returns text for the agent.
"""

from clockodo_mcp.tools import clock, entries, reference

__all__ = ["clock", "entries", "reference"]
