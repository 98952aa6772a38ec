"""Status tool and resource: get_status, state://session."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current session.

        Shows how many points are loaded, whether the mesh and image exist,
        and the current render parameters.
        """
        return json.dumps(state.summary(), indent=2)

    @mcp.resource("state://session", mime_type="application/json")
    def session_state() -> str:
        """Current session summary as JSON."""
        return json.dumps(state.summary(), indent=2)
