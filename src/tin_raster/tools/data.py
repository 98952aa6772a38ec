"""Data tools: load_points, triangulate_points."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.projection import load_points as do_load_points
from ..core.triangulation import triangulate
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_data_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_points(path: str, target_crs: str | None = None) -> str:
        """Load a point file of 'lat lon alt' lines and project it to planar metres.

        **Next:** triangulate_points, then render_image.

        Args:
            path: Text file with one 'latitude longitude altitude' record per line.
            target_crs: Projected CRS for the points (default: the render
                params target_crs, Lambert-93 unless changed).
        """
        crs = target_crs if target_crs is not None else state.render_params.target_crs
        try:
            points = do_load_points(path, target_crs=crs)
        except (OSError, ValueError) as e:
            return f"Error: {e}"

        # Only a CRS that projected successfully is remembered
        state.render_params.target_crs = crs
        state.source_path = path
        state.points = points
        # Points changed, so the mesh and image are stale
        state.clear_downstream()

        if not points:
            logger.debug("load_points read no records from %s", path)
            return f"No points found in {path}."

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        zs = [p.z for p in points]
        return (
            f"Loaded {len(points)} points: "
            f"x {min(xs):.0f}..{max(xs):.0f}, y {min(ys):.0f}..{max(ys):.0f}, "
            f"altitude {min(zs):.0f}m to {max(zs):.0f}m"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def triangulate_points(max_edge_length: float | None = None) -> str:
        """Build a Delaunay mesh over the loaded points.

        **Requires:** load_points first.
        **Next:** render_image.

        Args:
            max_edge_length: Drop triangles with an edge longer than this, in
                metres (default: the render params value, 70 unless changed).
        """
        try:
            require_state(state, points=True)
        except ValueError as e:
            return f"Error: {e}"

        if max_edge_length is not None:
            try:
                state.render_params.max_edge_length = max_edge_length
            except ValueError as e:
                return f"Error: {e}"

        mesh = triangulate(state.points, max_edge_length=state.render_params.max_edge_length)
        state.mesh = mesh
        state.clear_downstream(mesh=False)

        return f"Triangulated: {len(mesh.points)} points, {len(mesh.triangles)} triangles"
