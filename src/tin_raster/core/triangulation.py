"""Delaunay triangulation of projected points with long-edge rejection."""

import logging
from typing import Sequence

import numpy as np
from scipy.spatial import Delaunay, QhullError

from ..models import Mesh, Point, Triangle

logger = logging.getLogger(__name__)

# Triangles with any planar edge longer than this (metres) are dropped.
MAX_EDGE_LENGTH = 70.0


def _orient_ccw(xy: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Swap the last two vertices of every clockwise face."""
    a = xy[faces[:, 0]]
    b = xy[faces[:, 1]]
    c = xy[faces[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    faces = faces.copy()
    cw = cross < 0
    faces[cw] = faces[cw][:, [0, 2, 1]]
    return faces


def long_edge_mask(xy: np.ndarray, faces: np.ndarray, max_edge_length: float) -> np.ndarray:
    """True for faces with at least one edge longer than ``max_edge_length``."""
    limit_sq = max_edge_length * max_edge_length
    a = xy[faces[:, 0]]
    b = xy[faces[:, 1]]
    c = xy[faces[:, 2]]
    ab = np.sum((a - b) ** 2, axis=1)
    bc = np.sum((b - c) ** 2, axis=1)
    ca = np.sum((c - a) ** 2, axis=1)
    return (ab > limit_sq) | (bc > limit_sq) | (ca > limit_sq)


def triangulate(points: Sequence[Point], max_edge_length: float = MAX_EDGE_LENGTH) -> Mesh:
    """Delaunay-triangulate ``points`` in the xy plane.

    Kept triangles are wound counter-clockwise so their normals point up.
    Fewer than three points, or points that are all collinear, give a mesh
    with no triangles.
    """
    if max_edge_length <= 0:
        raise ValueError(f"max_edge_length must be positive, got {max_edge_length}")

    points = list(points)
    if len(points) < 3:
        logger.warning("Need at least 3 points to triangulate, got %d", len(points))
        return Mesh(points=points, triangles=[])

    xy = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    try:
        delaunay = Delaunay(xy)
    except QhullError as e:
        logger.warning("Delaunay triangulation failed: %s", e)
        return Mesh(points=points, triangles=[])

    faces = delaunay.simplices.astype(np.int64)
    too_long = long_edge_mask(xy, faces, max_edge_length)
    kept = _orient_ccw(xy, faces[~too_long])

    logger.info(
        "Triangulation done: %d triangles kept, %d rejected (edge > %.1f m)",
        len(kept), int(too_long.sum()), max_edge_length,
    )

    triangles = [Triangle(p1=int(a), p2=int(b), p3=int(c)) for a, b, c in kept]
    return Mesh(points=points, triangles=triangles)
