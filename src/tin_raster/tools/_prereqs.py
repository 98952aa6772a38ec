"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, points: bool = False, mesh: bool = False, raster: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, points=True, mesh=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if points and not state.points:
        raise ValueError(
            "Load points first with load_points."
        )
    if mesh and state.mesh is None:
        raise ValueError(
            "Triangulate the points first with triangulate_points."
        )
    if raster and state.raster is None:
        raise ValueError(
            "Render an image first with render_image."
        )
