"""utility modules for wakacfg-mcp"""

from wakacfg_mcp.utils.singleton_utils import SingletonInstance
from wakacfg_mcp.utils.logging_utils import Logger, logging_func
from wakacfg_mcp.utils.config_utils import (
    load_config_ini,
    clear_config,
    get_config_value,
    get_config_bool,
)

__all__ = [
    "SingletonInstance",
    "Logger",
    "logging_func",
    "load_config_ini",
    "clear_config",
    "get_config_value",
    "get_config_bool",
]
