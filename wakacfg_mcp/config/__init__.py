"""INI config store for the WakaTime config files."""

from wakacfg_mcp.config.location import ConfigLocation, Environment
from wakacfg_mcp.config.store import (
    DEFAULT_DASHBOARD_URL,
    ConfigStore,
    SectionRewriter,
    api_url_to_dashboard_url,
    get_config_store,
)

__all__ = [
    "ConfigLocation",
    "Environment",
    "ConfigStore",
    "SectionRewriter",
    "DEFAULT_DASHBOARD_URL",
    "api_url_to_dashboard_url",
    "get_config_store",
]
