"""LAN lobby and turn-handoff server."""

__version__ = "0.1.0"
