"""shared fixtures for config store tests"""

import pytest

from wakacfg_mcp.config.location import ConfigLocation, Environment
from wakacfg_mcp.config.store import ConfigStore


class RecordingLogger:
    """logging sink that keeps (level, message) pairs"""

    def __init__(self):
        self.records = []

    def debug(self, message: str):
        self.records.append(("debug", message))

    def info(self, message: str):
        self.records.append(("info", message))

    def warning(self, message: str):
        self.records.append(("warning", message))

    def error(self, message: str):
        self.records.append(("error", message))

    def messages(self, level: str):
        return [message for lvl, message in self.records if lvl == level]


@pytest.fixture
def logger():
    """recording logger"""
    return RecordingLogger()


@pytest.fixture
def home(tmp_path):
    """empty home directory"""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def make_store(home, logger):
    """factory for stores rooted at the temp home"""
    def factory(env=None):
        environment = Environment(env=env or {}, home=str(home))
        location = ConfigLocation(environment, logger=logger)
        return ConfigStore(location=location, logger=logger)
    return factory


@pytest.fixture
def store(make_store):
    """store rooted at the temp home"""
    return make_store()
