"""Config-related MCP tools.

This module exposes the WakaTime config store to MCP clients. All tools
share one ConfigStore so the cached API key, dashboard URL and vault
flag behave the same way they do for the host application.

Tools (6 total):
- Generic: config_get, config_set, config_status
- Settings: get_api_key, set_api_key, get_dashboard_url
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from wakacfg_mcp.config.store import (
    API_KEY,
    SETTINGS_SECTION,
    ConfigStore,
    get_config_store,
)


def mask_api_key(api_key: str) -> str:
    """Hide all but the last 4 characters of an API key."""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]


LINE_BREAKS = ("\n", "\r")


def validate_entry(section: str, key: str, value: str) -> Optional[str]:
    """Check that an entry stays on one line and reads back unchanged.

    Returns:
        An error message, or None when the entry can be written
    """
    for name, text in (("Section", section), ("Key", key), ("Value", value)):
        if any(brk in text for brk in LINE_BREAKS):
            return f"{name} can not contain line breaks"
    if "[" in section or "]" in section:
        return "Section can not contain '[' or ']'"
    if "=" in key or "=" in value:
        return "Keys and values can not contain '='"
    return None


def describe_status(store: ConfigStore) -> str:
    """Summarize where the config files live and the store state."""
    public_path = store.path(internal=False)
    internal_path = store.path(internal=True)
    status_lines = [
        "📊 Config Status",
        f"  Base folder: {store.location.base_dir}",
        f"  Public file: {public_path} ({'exists' if public_path.exists() else 'missing'})",
        f"  Internal file: {internal_path} ({'exists' if internal_path.exists() else 'missing'})",
        f"  Using vault command: {'Yes' if store.using_vault_cmd() else 'No'}",
    ]
    return "\n".join(status_lines)


def register_config_tools(mcp: FastMCP, store: Optional[ConfigStore] = None):
    """Register all config-related MCP tools (6 tools total).

    Args:
        mcp: server to register on
        store: store to use, defaults to the process-wide one
    """

    def _store() -> ConfigStore:
        return store if store is not None else get_config_store()

    @mcp.tool()
    def config_get(section: str, key: str, internal: bool = False) -> str:
        """Read a value from the WakaTime config file.

        Args:
            section: Section name, case-insensitive (e.g. "settings")
            key: Key name, case-sensitive (e.g. "api_url")
            internal: Read wakatime-internal.cfg instead of .wakatime.cfg

        Returns:
            The stored value, or a message when it is not set
        """
        value = _store().get(section, key, internal)
        if value is None:
            return f"{key} is not set in [{section.lower()}]"
        return value

    @mcp.tool()
    def config_set(section: str, key: str, value: str, internal: bool = False) -> str:
        """Write a value to the WakaTime config file.

        Values must fit on one line and not contain "=", or they can not
        be read back.

        Args:
            section: Section name (stored lowercase)
            key: Key name
            value: New value, may be empty
            internal: Write wakatime-internal.cfg instead of .wakatime.cfg

        Returns:
            Confirmation or error message
        """
        invalid = validate_entry(section, key, value)
        if invalid:
            return f"❌ {invalid}"
        error = _store().set(section, key, internal, value)
        if error:
            return f"❌ {error}"
        return f"Saved {key} in [{section.lower()}]"

    @mcp.tool()
    def config_status() -> str:
        """Show resolved config file paths and store state.

        Returns:
            Current config status
        """
        return describe_status(_store())

    @mcp.tool()
    def get_api_key() -> str:
        """Show the configured WakaTime API key (masked).

        Returns:
            Masked API key, or a message when it is unavailable
        """
        current = _store()
        api_key = current.get_api_key()
        if current.using_vault_cmd():
            return "API key is provided by api_key_vault_cmd"
        if not api_key:
            return "API key is not set"
        return mask_api_key(api_key)

    @mcp.tool()
    def set_api_key(api_key: str) -> str:
        """Store a WakaTime API key in the [settings] section.

        Args:
            api_key: The new API key

        Returns:
            Confirmation or error message
        """
        invalid = validate_entry(SETTINGS_SECTION, API_KEY, api_key.strip())
        if invalid:
            return f"❌ {invalid}"
        error = _store().set_api_key(api_key.strip())
        if error:
            return f"❌ {error}"
        return "API key saved"

    @mcp.tool()
    def get_dashboard_url() -> str:
        """Get the WakaTime dashboard URL.

        Derived from api_url in [settings], or the public dashboard.

        Returns:
            Dashboard URL
        """
        return _store().get_dashboard_url()
