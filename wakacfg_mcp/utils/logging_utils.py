"""logging utilities with rich support"""

import os
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.theme import Theme

from wakacfg_mcp.utils.config_utils import get_config_bool, get_config_value
from wakacfg_mcp.utils.singleton_utils import SingletonInstance


# custom theme for log levels
custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "debug": "dim white",
})

LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

LOG_FILE_NAME = "wakacfg.log"


class Logger(SingletonInstance):
    """singleton logger class with rich support

    Records go to stderr, stdout belongs to the MCP stdio transport.
    """

    def __init__(
        self,
        prefix: str = "wakacfg",
        level: Optional[str] = None,
        log_dir: Optional[str] = None,
        console: Optional[Console] = None,
    ):
        """initialize logger

        Args:
            prefix: log message prefix
            level: minimum level, defaults to [logging] level
            log_dir: directory for the log file, defaults to [logging] log_dir
                     (no file when unset)
            console: console to print to, mostly for tests
        """
        self.prefix = prefix
        level = (level or get_config_value("logging", "level", default="info")).lower()
        if level not in LEVELS:
            raise ValueError(f"unknown log level: {level}")
        self.level = level
        self.log_dir = log_dir if log_dir is not None else get_config_value("logging", "log_dir")
        if console is None and get_config_bool("logging", "console", default=True):
            console = Console(theme=custom_theme, stderr=True)
        self.console = console
        self._ensure_log_dir()

    @property
    def log_path(self) -> Optional[str]:
        """path of the log file, if file logging is on"""
        if not self.log_dir:
            return None
        return os.path.join(self.log_dir, LOG_FILE_NAME)

    def _ensure_log_dir(self):
        """create log directory if not exists"""
        if self.log_dir and not os.path.exists(self.log_dir):
            os.makedirs(self.log_dir)

    def _format(self, level: str, message: str) -> str:
        """format log message"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"[{timestamp}] [{self.prefix}] {level}: {message}"

    def is_enabled(self, level: str) -> bool:
        """check if records of this level are emitted"""
        return LEVELS[level] >= LEVELS[self.level]

    def _emit(self, level: str, message: str):
        if not self.is_enabled(level):
            return
        line = self._format(level.upper(), message)
        if self.console is not None:
            # markup off, config values may contain [section] brackets
            self.console.print(line, style=level, markup=False, highlight=False)
        if self.log_path:
            self._append_to_file(line)

    def _append_to_file(self, line: str):
        """append a record to the log file, turning file logging off on failure"""
        try:
            with open(self.log_path, "a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as e:
            path = self.log_path
            self.log_dir = None
            console = self.console or Console(theme=custom_theme, stderr=True)
            console.print(
                self._format("ERROR", f"Could not write log file {path}, file logging disabled: {e}"),
                style="error",
                markup=False,
                highlight=False,
            )

    def info(self, message: str):
        """log info level message"""
        self._emit("info", message)

    def error(self, message: str):
        """log error level message"""
        self._emit("error", message)

    def warning(self, message: str):
        """log warning level message"""
        self._emit("warning", message)

    def debug(self, message: str):
        """log debug level message"""
        self._emit("debug", message)


def logging_func(desc: str = ""):
    """decorator for function logging

    Args:
        desc: description of the function
    """
    def decorator(function):
        def wrapper(*args, **kwargs):
            Logger.instance().info(f"[start] {function.__name__} - {desc}")
            result = function(*args, **kwargs)
            Logger.instance().info(f"[end] {function.__name__}")
            return result
        return wrapper
    return decorator
