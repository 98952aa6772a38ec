"""Lambertian hill shading from a fixed north-west light."""

import math

from ..models import Point

AMBIENT = 0.4
DIFFUSE = 0.6


def _normalize(x: float, y: float, z: float) -> tuple[float, float, float]:
    length = math.sqrt(x * x + y * y + z * z)
    if length > 0:
        return x / length, y / length, z / length
    return 0.0, 0.0, 0.0


# Azimuth 315 deg, elevation 45 deg: cos(45)*sin(315), cos(45)*cos(315), sin(45)
LIGHT_DIRECTION = _normalize(-0.5, 0.5, 0.7)


def surface_normal(p1: Point, p2: Point, p3: Point) -> tuple[float, float, float]:
    """Unit normal of (p2 - p1) x (p3 - p1); the zero vector for collinear input."""
    ux, uy, uz = p2.x - p1.x, p2.y - p1.y, p2.z - p1.z
    vx, vy, vz = p3.x - p1.x, p3.y - p1.y, p3.z - p1.z
    return _normalize(
        uy * vz - uz * vy,
        uz * vx - ux * vz,
        ux * vy - uy * vx,
    )


def shade_factor(p1: Point, p2: Point, p3: Point) -> float:
    """Brightness multiplier in [0.4, 1.0]. Winding order decides the normal's sign."""
    nx, ny, nz = surface_normal(p1, p2, p3)
    lx, ly, lz = LIGHT_DIRECTION
    intensity = max(0.0, nx * lx + ny * ly + nz * lz)
    return AMBIENT + DIFFUSE * intensity
