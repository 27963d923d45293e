"""MCP tool registrars."""
