"""Tests for the config MCP tools."""

import pytest
from mcp.server.fastmcp import FastMCP

from wakacfg_mcp.tools.config_tools import (
    describe_status,
    mask_api_key,
    register_config_tools,
    validate_entry,
)


@pytest.fixture
def mcp(store):
    """server with config tools bound to the temp store"""
    server = FastMCP("wakacfg-test")
    register_config_tools(server, store)
    return server


async def call(mcp, name, **arguments):
    """call a tool and return its text output"""
    result = await mcp.call_tool(name, arguments)
    # newer mcp releases return (content, structured_content)
    if isinstance(result, tuple):
        result = result[0]
    return "".join(block.text for block in result)


class TestRegistration:
    """Tests for tool registration."""

    async def test_all_tools_registered(self, mcp):
        """Test that every config tool is listed by the server."""
        tools = await mcp.list_tools()
        names = {tool.name for tool in tools}

        assert names == {
            "config_get",
            "config_set",
            "config_status",
            "get_api_key",
            "set_api_key",
            "get_dashboard_url",
        }


class TestConfigGetSet:
    """Tests for config_get and config_set."""

    async def test_get_missing_value(self, mcp):
        """Test the message for a value that is not set."""
        text = await call(mcp, "config_get", section="Settings", key="api_url")
        assert text == "api_url is not set in [settings]"

    async def test_set_then_get(self, mcp, store):
        """Test that a saved value reads back."""
        text = await call(mcp, "config_set", section="Settings", key="api_url", value="https://x.com/api")
        assert text == "Saved api_url in [settings]"
        assert await call(mcp, "config_get", section="settings", key="api_url") == "https://x.com/api"
        assert store.path().read_text(encoding="utf-8") == "[settings]\napi_url = https://x.com/api\n"

    async def test_set_internal(self, mcp, store):
        """Test writing the internal file."""
        await call(mcp, "config_set", section="internal", key="cli_version", value="1.0", internal=True)
        assert store.get("internal", "cli_version", internal=True) == "1.0"
        assert not store.path().exists()

    async def test_set_rejects_equals(self, mcp, store):
        """Test that '=' in a value is refused."""
        text = await call(mcp, "config_set", section="settings", key="api_url", value="https://x.com/?a=b")
        assert text == "❌ Keys and values can not contain '='"
        assert not store.path().exists()

    async def test_set_rejects_line_breaks(self, mcp, store):
        """Test that a value can not inject lines or headers."""
        text = await call(mcp, "config_set", section="settings", key="api_url", value="x\n[evil]\nfoo")
        assert text == "❌ Value can not contain line breaks"
        text = await call(mcp, "config_set", section="settings", key="api\r_url", value="x")
        assert text == "❌ Key can not contain line breaks"
        assert not store.path().exists()

    async def test_set_rejects_brackets_in_section(self, mcp, store):
        """Test that section names can not close their header early."""
        text = await call(mcp, "config_set", section="a]\n[b", key="k", value="v")
        assert text.startswith("❌ ")
        text = await call(mcp, "config_set", section="set[tings", key="k", value="v")
        assert text == "❌ Section can not contain '[' or ']'"
        assert not store.path().exists()

    async def test_set_reports_write_error(self, mcp, store):
        """Test that write failures come back as text."""
        store.path().mkdir()
        text = await call(mcp, "config_set", section="settings", key="k", value="v")
        assert text.startswith("❌ Could not write config file")


class TestApiKeyTools:
    """Tests for get_api_key and set_api_key."""

    async def test_api_key_not_set(self, mcp):
        """Test the message when no key is configured."""
        assert await call(mcp, "get_api_key") == "API key is not set"

    async def test_set_api_key_is_masked(self, mcp, store):
        """Test that the stored key is shown masked."""
        assert await call(mcp, "set_api_key", api_key=" waka_12345678 ") == "API key saved"
        assert store.get("settings", "api_key") == "waka_12345678"
        assert await call(mcp, "get_api_key") == "*********5678"

    async def test_set_api_key_rejects_line_breaks(self, mcp, store):
        """Test that a multi-line key is refused."""
        text = await call(mcp, "set_api_key", api_key="abc\n[evil]")
        assert text == "❌ Value can not contain line breaks"
        assert not store.path().exists()

    async def test_set_api_key_rejects_equals(self, mcp):
        """Test that '=' in a key is refused."""
        text = await call(mcp, "set_api_key", api_key="abc=def")
        assert text == "❌ Keys and values can not contain '='"

    async def test_vault_notice(self, mcp, store):
        """Test the vault command notice."""
        store.set("settings", "api_key_vault_cmd", False, "pass show waka")
        assert await call(mcp, "get_api_key") == "API key is provided by api_key_vault_cmd"


class TestInfoTools:
    """Tests for get_dashboard_url and config_status."""

    async def test_dashboard_url(self, mcp, store):
        """Test the url derived from api_url."""
        store.set("settings", "api_url", False, "https://example.com/api/v1")
        assert await call(mcp, "get_dashboard_url") == "https://example.com"

    async def test_status(self, mcp, home):
        """Test the status tool output."""
        text = await call(mcp, "config_status")
        assert f"Base folder: {home}" in text
        assert "Using vault command: No" in text


class TestFormatting:
    """Tests for tool output helpers."""

    def test_mask_api_key(self):
        """Test that only the last 4 characters stay visible."""
        assert mask_api_key("waka_12345678") == "*********5678"

    def test_mask_short_api_key(self):
        """Test that short keys are fully hidden."""
        assert mask_api_key("abc") == "***"
        assert mask_api_key("") == ""

    def test_validate_entry(self):
        """Test entry validation rules."""
        assert validate_entry("settings", "api_key", "abc") is None
        assert validate_entry("settings", "api_key", "") is None
        assert validate_entry("set\ntings", "k", "v") == "Section can not contain line breaks"
        assert validate_entry("[settings]", "k", "v") == "Section can not contain '[' or ']'"
        assert validate_entry("settings", "k=", "v") == "Keys and values can not contain '='"

    def test_status_reports_paths(self, store, home):
        """Test status output before and after a write."""
        status = describe_status(store)
        assert f"Base folder: {home}" in status
        assert "(missing)" in status
        assert "Using vault command: No" in status

        store.set("settings", "api_key", False, "abc")
        status = describe_status(store)
        assert f"Public file: {home / '.wakatime.cfg'} (exists)" in status
        assert "wakatime-internal.cfg (missing)" in status
