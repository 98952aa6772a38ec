"""Read lat/lon/alt records and project them to a planar CRS with pyproj."""

import logging
from pathlib import Path

import numpy as np
from pyproj import Transformer
from pyproj.exceptions import CRSError

from ..models import Point

logger = logging.getLogger(__name__)

GEOGRAPHIC_CRS = "EPSG:4326"
# RGF93 / Lambert-93, metres
LAMBERT_93 = "EPSG:2154"


def read_points(path: str | Path) -> np.ndarray:
    """Read whitespace-separated ``lat lon alt`` lines into an (n, 3) array.

    An empty file yields an empty (0, 3) array.
    """
    path = Path(path)
    if not path.read_text().strip():
        return np.empty((0, 3), dtype=np.float64)
    try:
        records = np.loadtxt(path, dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise ValueError(f"Malformed point file {path}: {e}") from e

    if records.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    if records.shape[1] != 3:
        raise ValueError(
            f"Malformed point file {path}: expected 3 columns (lat lon alt), "
            f"got {records.shape[1]}"
        )

    finite = np.all(np.isfinite(records), axis=1)
    if not finite.all():
        logger.warning("Dropping %d non-finite records from %s", int((~finite).sum()), path)
        records = records[finite]
    return records


def project_points(records: np.ndarray, target_crs: str = LAMBERT_93) -> list[Point]:
    """Project (lat, lon, alt) rows to planar (x, y) metres; altitude passes through."""
    try:
        transformer = Transformer.from_crs(GEOGRAPHIC_CRS, target_crs, always_xy=True)
    except CRSError as e:
        raise ValueError(f"Unknown target CRS {target_crs!r}: {e}") from e

    records = np.asarray(records, dtype=np.float64).reshape(-1, 3)
    if len(records) == 0:
        return []

    lats, lons, alts = records[:, 0], records[:, 1], records[:, 2]
    xs, ys = transformer.transform(lons, lats)
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)

    return [
        Point(x=float(x), y=float(y), z=float(z))
        for x, y, z in zip(xs, ys, alts)
    ]


def load_points(path: str | Path, target_crs: str = LAMBERT_93) -> list[Point]:
    """Read a point file and project it."""
    records = read_points(path)
    points = project_points(records, target_crs=target_crs)
    logger.info("Loaded %d points from %s", len(points), path)
    return points
