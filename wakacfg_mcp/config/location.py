"""Config file location resolution.

The base directory is decided once per ConfigLocation: the override
directory ($WAKATIME_HOME by default) when it is set and exists,
otherwise the user's home directory. Both file flavors hang off it:

- public:   <base>/.wakatime.cfg
- internal: <base>/.wakatime/wakatime-internal.cfg
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from wakacfg_mcp.utils.config_utils import get_config_value

PUBLIC_FILE_NAME = ".wakatime.cfg"
INTERNAL_FILE_NAME = "wakatime-internal.cfg"
INTERNAL_DIR_NAME = ".wakatime"
DEFAULT_HOME_ENV_VAR = "WAKATIME_HOME"


class Environment:
    """Supplies the override and home directories."""

    def __init__(
        self,
        env: Optional[Mapping[str, str]] = None,
        home: Optional[str] = None,
        home_env_var: Optional[str] = None,
    ):
        self._env = os.environ if env is None else env
        self._home = home
        self.home_env_var = home_env_var or get_config_value(
            "store", "home_env_var", default=DEFAULT_HOME_ENV_VAR
        )

    def override_dir(self) -> Optional[str]:
        """Override directory, or None when unset or blank."""
        value = self._env.get(self.home_env_var)
        if value is None or not value.strip():
            return None
        return value

    def home_dir(self) -> str:
        if self._home is not None:
            return self._home
        return str(Path.home())


class ConfigLocation:
    """Resolves config file paths from a cached base directory."""

    def __init__(self, environment: Optional[Environment] = None, logger=None):
        self._environment = environment or Environment()
        self._logger = logger
        self._base_dir: Optional[Path] = None

    @property
    def base_dir(self) -> Path:
        """Base directory, probed on first access only."""
        if self._base_dir is None:
            self._base_dir = self._resolve_base_dir()
        return self._base_dir

    @property
    def is_resolved(self) -> bool:
        return self._base_dir is not None

    def _resolve_base_dir(self) -> Path:
        override = self._environment.override_dir()
        if override is not None:
            folder = Path(override)
            if folder.exists():
                folder = folder.absolute()
                self._log_debug(
                    f"Using ${self._environment.home_env_var} for config folder: {folder}"
                )
                return folder

        folder = Path(self._environment.home_dir()).absolute()
        self._log_debug(f"Using $HOME for config folder: {folder}")
        return folder

    def _log_debug(self, message: str):
        if self._logger is not None:
            self._logger.debug(message)

    def path(self, internal: bool = False) -> Path:
        """Absolute path of the public or internal config file."""
        if internal:
            return self.base_dir / INTERNAL_DIR_NAME / INTERNAL_FILE_NAME
        return self.base_dir / PUBLIC_FILE_NAME
