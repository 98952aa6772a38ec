"""MCP server for tin-raster.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.data import register_data_tools
from .tools.params import register_params_tools
from .tools.render import register_render_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "tin-raster",
    instructions="Render colorized, hill-shaded raster images from triangulated elevation points",
)

# Register all tool groups
register_data_tools(mcp)
register_params_tools(mcp)
register_render_tools(mcp)
register_export_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
