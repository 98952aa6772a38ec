"""Rendering tool: render_image."""

import numpy as np
from mcp.server.fastmcp import Context, FastMCP

from ..state import state
from ..core.rasterizer import PROGRESS_EVERY, Rasterizer
from ._prereqs import require_state


def register_render_tools(mcp: FastMCP):

    @mcp.tool()
    async def render_image(ctx: Context) -> str:
        """Render the triangulated surface to a colorized, hill-shaded image.

        **Requires:** load_points + triangulate_points.
        **Next:** export_ppm or export_png.

        Re-run this after changing render params to update the image.
        Reports progress every block of rows.
        """
        try:
            require_state(state, points=True, mesh=True)
        except ValueError as e:
            return f"Error: {e}"

        p = state.render_params
        try:
            rasterizer = Rasterizer(
                state.mesh, p.width,
                max_depth=p.max_depth, max_triangles=p.max_triangles,
            )
        except ValueError as e:
            return f"Error: {e}"

        height = rasterizer.height
        pixels = np.zeros((height, rasterizer.width, 3), dtype=np.uint8)
        covered = 0
        for row in range(height):
            pixels[row], row_covered = rasterizer.render_row(row)
            covered += row_covered
            if (row + 1) % PROGRESS_EVERY == 0 or row + 1 == height:
                await ctx.report_progress(row + 1, height)

        state.raster = rasterizer.result(pixels, covered)

        total = rasterizer.width * height
        return (
            f"Image rendered: {rasterizer.width}x{height} pixels, "
            f"{covered} of {total} covered by the surface, "
            f"altitude {rasterizer.min_z:.0f}m to {rasterizer.max_z:.0f}m"
        )
