"""Session state for the tin-raster MCP server.

Holds the data of the current rendering session: the projected points, the
triangulated mesh, render parameters and the last rendered raster.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tin_raster.core.models import RasterResult
from tin_raster.core.projection import LAMBERT_93
from tin_raster.core.quadtree import MAX_DEPTH, MAX_TRIANGLES
from tin_raster.core.triangulation import MAX_EDGE_LENGTH
from tin_raster.models import Mesh, Point


class RenderParams(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    width: int = Field(default=800, gt=0)
    max_depth: int = Field(default=MAX_DEPTH, ge=0)
    max_triangles: int = Field(default=MAX_TRIANGLES, gt=0)
    max_edge_length: float = Field(default=MAX_EDGE_LENGTH, gt=0)
    target_crs: str = Field(default=LAMBERT_93, min_length=1)


class SessionState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    source_path: Optional[str] = None
    points: list[Point] = []
    mesh: Optional[Mesh] = None
    render_params: RenderParams = Field(default_factory=RenderParams)
    raster: Optional[RasterResult] = None

    def clear_downstream(self, *, mesh: bool = True) -> None:
        """Drop results derived from the points (and the mesh, unless mesh=False)."""
        if mesh:
            self.mesh = None
        self.raster = None

    def summary(self) -> dict:
        return {
            "data": {
                "source": self.source_path,
                "points_loaded": len(self.points),
            },
            "mesh": {
                "triangulated": self.mesh is not None,
                "triangles": len(self.mesh.triangles) if self.mesh else 0,
            },
            "render": self.render_params.model_dump(),
            "raster": {
                "rendered": self.raster is not None,
                "width": self.raster.width if self.raster else None,
                "height": self.raster.height if self.raster else None,
                "altitude_range": (
                    f"{self.raster.min_z:.0f}m - {self.raster.max_z:.0f}m"
                    if self.raster else None
                ),
                "covered_pixels": self.raster.covered_pixels if self.raster else 0,
            },
        }


# Global session state, one per MCP server process
state = SessionState()
