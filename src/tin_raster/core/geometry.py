"""Planar geometry helpers shared by the quadtree and the rasterizer."""

from typing import Optional, Sequence

from ..models import BoundingBox, Point, Triangle

# Below this magnitude a barycentric determinant is treated as zero.
DEGENERATE_EPSILON = 1e-12


def triangle_bounds(triangle: Triangle, points: Sequence[Point]) -> BoundingBox:
    """Smallest box holding the triangle's three vertices."""
    a = points[triangle.p1]
    b = points[triangle.p2]
    c = points[triangle.p3]
    return BoundingBox(
        min_x=min(a.x, b.x, c.x),
        min_y=min(a.y, b.y, c.y),
        max_x=max(a.x, b.x, c.x),
        max_y=max(a.y, b.y, c.y),
    )


def point_in_triangle(px: float, py: float, p1: Point, p2: Point, p3: Point) -> bool:
    """Inclusive point-in-triangle test using the doubled signed area.

    Zero-area triangles contain nothing.
    """
    area = 0.5 * (
        -p2.y * p3.x
        + p1.y * (-p2.x + p3.x)
        + p1.x * (p2.y - p3.y)
        + p2.x * p3.y
    )
    if abs(area) < DEGENERATE_EPSILON:
        return False
    s = 1.0 / (2.0 * area) * (
        p1.y * p3.x - p1.x * p3.y + (p3.y - p1.y) * px + (p1.x - p3.x) * py
    )
    t = 1.0 / (2.0 * area) * (
        p1.x * p2.y - p1.y * p2.x + (p1.y - p2.y) * px + (p2.x - p1.x) * py
    )
    return s >= 0 and t >= 0 and (1 - s - t) >= 0


def interpolate_z(px: float, py: float, p1: Point, p2: Point, p3: Point) -> Optional[float]:
    """Barycentric altitude at (px, py), or None for a degenerate triangle."""
    det = (p2.y - p3.y) * (p1.x - p3.x) + (p3.x - p2.x) * (p1.y - p3.y)
    if abs(det) < DEGENERATE_EPSILON:
        return None
    lambda1 = ((p2.y - p3.y) * (px - p3.x) + (p3.x - p2.x) * (py - p3.y)) / det
    lambda2 = ((p3.y - p1.y) * (px - p3.x) + (p1.x - p3.x) * (py - p3.y)) / det
    lambda3 = 1.0 - lambda1 - lambda2
    return lambda1 * p1.z + lambda2 * p2.z + lambda3 * p3.z


def mesh_extent(points: Sequence[Point]) -> tuple[BoundingBox, float, float]:
    """Planar bounds and altitude range of a non-empty point sequence, in one pass."""
    if not points:
        raise ValueError("Cannot compute the extent of an empty point set")
    first = points[0]
    min_x = max_x = first.x
    min_y = max_y = first.y
    min_z = max_z = first.z
    for p in points:
        if p.x < min_x:
            min_x = p.x
        if p.x > max_x:
            max_x = p.x
        if p.y < min_y:
            min_y = p.y
        if p.y > max_y:
            max_y = p.y
        if p.z < min_z:
            min_z = p.z
        if p.z > max_z:
            max_z = p.z
    bounds = BoundingBox(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
    return bounds, min_z, max_z
