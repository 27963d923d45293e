"""server settings utilities

Settings for the server itself (logging, naming), not the user's
.wakatime.cfg which is handled by wakacfg_mcp.config.
"""

import os
import configparser

SERVER_CONFIG_ENV = "WAKACFG_SERVER_CONFIG"
DEFAULT_SERVER_CONFIG = "./config.ini"

global_config = configparser.ConfigParser(interpolation=None)


def load_config_ini(config_path: str = None) -> bool:
    """load server configuration file

    Args:
        config_path: path to the settings file, falls back to
                     $WAKACFG_SERVER_CONFIG and then ./config.ini

    Returns:
        True if a file was read
    """
    if config_path is None:
        config_path = os.environ.get(SERVER_CONFIG_ENV) or DEFAULT_SERVER_CONFIG
    if not os.path.exists(config_path):
        return False
    global_config.read(config_path, encoding="utf-8")
    return True


def clear_config() -> None:
    """forget every loaded setting"""
    for section in global_config.sections():
        global_config.remove_section(section)


def get_config_value(section: str, key: str, default=None):
    """get configuration value

    Args:
        section: config section name
        key: config key name
        default: default value if not found or blank

    Returns:
        config value or default
    """
    try:
        value = global_config.get(section, key)
    except (configparser.NoSectionError, configparser.NoOptionError):
        return default
    if not value.strip():
        return default
    return value.strip()


def get_config_bool(section: str, key: str, default: bool = False) -> bool:
    """get configuration value as boolean"""
    value = get_config_value(section, key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


# auto-load on import
load_config_ini()
