"""Export tools: export_ppm, export_png."""

import logging
import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..exporters.ppm import export_ppm as do_export_ppm
from ..exporters.png import export_png as do_export_png
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def _prepare_export(output_path: str) -> str | None:
    """Run the shared export checks; return an error message or None."""
    try:
        require_state(state, raster=True)
        _validate_output_path(output_path)
    except ValueError as e:
        return f"Error: {e}"
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    return None


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_ppm(output_path: str) -> str:
        """Export the rendered image as a binary PPM (P6) file.

        Args:
            output_path: Where to save the .ppm file (absolute path)
        """
        error = _prepare_export(output_path)
        if error:
            return error

        try:
            result = do_export_ppm(state.raster.pixels, output_path)
        except OSError as e:
            logger.warning("PPM export to %s failed: %s", output_path, e)
            return f"Error: could not write {output_path}: {e}"
        return f"PPM exported to {output_path} ({result['width']}x{result['height']})"

    @mcp.tool()
    def export_png(output_path: str) -> str:
        """Export the rendered image as a PNG file.

        Args:
            output_path: Where to save the .png file (absolute path)
        """
        error = _prepare_export(output_path)
        if error:
            return error

        try:
            result = do_export_png(state.raster.pixels, output_path)
        except OSError as e:
            logger.warning("PNG export to %s failed: %s", output_path, e)
            return f"Error: could not write {output_path}: {e}"
        return f"PNG exported to {output_path} ({result['width']}x{result['height']})"
