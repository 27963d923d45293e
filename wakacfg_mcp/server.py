"""MCP server entry point for the WakaTime config store."""

from mcp.server.fastmcp import FastMCP

from wakacfg_mcp.tools.config_tools import register_config_tools
from wakacfg_mcp.utils.config_utils import get_config_value
from wakacfg_mcp.utils.logging_utils import logging_func

mcp = FastMCP(get_config_value("server", "name", default="wakacfg"))


@logging_func("serve config tools over stdio")
def main():
    """Main entry point for the MCP server."""
    register_config_tools(mcp)
    mcp.run()


if __name__ == "__main__":
    main()
