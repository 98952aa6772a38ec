"""Render configuration tool: set_render_params."""

from mcp.server.fastmcp import FastMCP

from ..state import RenderParams, state


def register_params_tools(mcp: FastMCP):

    @mcp.tool()
    def set_render_params(
        width: int | None = None,
        max_depth: int | None = None,
        max_triangles: int | None = None,
        max_edge_length: float | None = None,
        target_crs: str | None = None,
    ) -> str:
        """Set image and spatial index parameters.

        Can be called any time before render_image.
        **Next:** render_image (re-run after changing params to update the image).

        Args:
            width: Output image width in pixels (default 800). Height follows
                the mesh aspect ratio.
            max_depth: Quadtree depth limit (default 10).
            max_triangles: Quadtree leaf capacity before splitting (default 1500).
            max_edge_length: Triangulation edge limit in metres (default 70).
                Takes effect on the next triangulate_points.
            target_crs: Projected CRS used by the next load_points (default EPSG:2154).
        """
        updates = {
            name: value
            for name, value in [
                ("width", width), ("max_depth", max_depth),
                ("max_triangles", max_triangles), ("max_edge_length", max_edge_length),
                ("target_crs", target_crs),
            ]
            if value is not None
        }
        # Validate the whole set first so a bad value changes nothing
        try:
            p = RenderParams.model_validate({**state.render_params.model_dump(), **updates})
        except ValueError as e:
            return f"Error: {e}"
        state.render_params = p

        # Image is stale once params change
        state.raster = None

        return (
            f"Render params: width={p.width}px, max_depth={p.max_depth}, "
            f"max_triangles={p.max_triangles}, max_edge_length={p.max_edge_length}m, "
            f"target_crs={p.target_crs}"
        )
