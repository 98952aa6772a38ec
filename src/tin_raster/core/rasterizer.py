"""Rasterize a triangulated surface into a colorized, hill-shaded RGB image."""

import logging
import math
from typing import Optional

import numpy as np

from ..models import Mesh
from .colormap import color_for
from .geometry import interpolate_z, mesh_extent
from .models import RasterResult
from .quadtree import MAX_DEPTH, MAX_TRIANGLES, build_quadtree
from .shading import shade_factor

logger = logging.getLogger(__name__)

BACKGROUND = (0, 0, 0)
PROGRESS_EVERY = 100  # rows between progress log lines


def image_height(width: int, range_x: float, range_y: float) -> int:
    """Height preserving the mesh aspect ratio, rounded half up, at least 1."""
    return max(1, int(math.floor(width * range_y / range_x + 0.5)))


class Rasterizer:
    """Renders one mesh at one width.

    Construction scans the points, builds the quadtree and fixes the image
    size; the tree is read-only afterwards. Rows can be rendered one at a
    time with ``render_row`` or all at once with ``render``.
    """

    def __init__(
        self,
        mesh: Mesh,
        width: int,
        max_depth: int = MAX_DEPTH,
        max_triangles: int = MAX_TRIANGLES,
    ):
        if not mesh.points:
            raise ValueError("Mesh has no points")
        if width <= 0:
            raise ValueError(f"Image width must be positive, got {width}")

        self.mesh = mesh
        self.width = width
        self.bounds, self.min_z, self.max_z = mesh_extent(mesh.points)

        range_x = self.bounds.width
        range_y = self.bounds.height
        if range_x <= 0 or range_y <= 0:
            raise ValueError(
                f"Invalid mesh dimensions: x range {range_x}, y range {range_y}"
            )

        logger.info("Building quadtree over %d triangles", len(mesh.triangles))
        self.tree = build_quadtree(
            self.bounds, mesh.triangles, mesh.points,
            max_depth=max_depth, max_triangles=max_triangles,
        )
        logger.info("Quadtree built: %s", self.tree.stats())

        self.height = image_height(width, range_x, range_y)
        self.pixel_size_x = range_x / width
        self.pixel_size_y = range_y / self.height
        self._shades: dict = {}

    def _shade(self, triangle) -> float:
        shade = self._shades.get(triangle)
        if shade is None:
            pts = self.mesh.points
            shade = shade_factor(pts[triangle.p1], pts[triangle.p2], pts[triangle.p3])
            self._shades[triangle] = shade
        return shade

    def pixel_color(self, x: float, y: float) -> Optional[tuple[int, int, int]]:
        """Shaded color of the surface at world (x, y), or None if uncovered."""
        pts = self.mesh.points
        t = self.tree.find(x, y, pts)
        if t is None:
            return None
        z = interpolate_z(x, y, pts[t.p1], pts[t.p2], pts[t.p3])
        if z is None:
            return None
        r, g, b = color_for(z, self.min_z, self.max_z)
        shade = self._shade(t)
        return (
            int(max(0.0, min(255.0, r * shade))),
            int(max(0.0, min(255.0, g * shade))),
            int(max(0.0, min(255.0, b * shade))),
        )

    def render_row(self, row: int) -> tuple[np.ndarray, int]:
        """Render one image row; returns the (width, 3) pixels and covered count."""
        out = np.zeros((self.width, 3), dtype=np.uint8)
        y = self.bounds.max_y - (row + 0.5) * self.pixel_size_y
        covered = 0
        for col in range(self.width):
            x = self.bounds.min_x + (col + 0.5) * self.pixel_size_x
            color = self.pixel_color(x, y)
            if color is not None:
                out[col] = color
                covered += 1
        return out, covered

    def result(self, pixels: np.ndarray, covered: int) -> RasterResult:
        return RasterResult(
            pixels=pixels,
            width=self.width,
            height=self.height,
            min_z=self.min_z,
            max_z=self.max_z,
            bounds=self.bounds,
            covered_pixels=covered,
        )

    def render(self) -> RasterResult:
        logger.info("Rendering %dx%d image", self.width, self.height)
        pixels = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        covered = 0
        for row in range(self.height):
            if row % PROGRESS_EVERY == 0:
                logger.debug("Processing row %d/%d", row, self.height)
            pixels[row], row_covered = self.render_row(row)
            covered += row_covered
        return self.result(pixels, covered)


def rasterize(
    mesh: Mesh,
    width: int,
    max_depth: int = MAX_DEPTH,
    max_triangles: int = MAX_TRIANGLES,
) -> Optional[RasterResult]:
    """Render ``mesh`` at ``width`` pixels wide.

    Returns None for a mesh without points. Raises ValueError when the mesh
    has a zero x or y extent.
    """
    if not mesh.points:
        logger.warning("Mesh has no points, nothing to render")
        return None
    return Rasterizer(
        mesh, width, max_depth=max_depth, max_triangles=max_triangles,
    ).render()
