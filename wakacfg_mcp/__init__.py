"""MCP server exposing the WakaTime INI config store."""

__version__ = "0.1.0"
