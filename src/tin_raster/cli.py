"""
Command-line interface: render a lat/lon/alt point file to an image.

Usage: create-raster DATA WIDTH [-o OUTPUT]
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .core.projection import load_points
from .core.rasterizer import rasterize
from .core.triangulation import triangulate
from .exporters.png import export_png
from .exporters.ppm import export_ppm
from .state import RenderParams

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def parse_args(argv=None):
    defaults = RenderParams()
    parser = argparse.ArgumentParser(
        prog="create-raster",
        description="Render a colorized, hill-shaded image from a lat/lon/alt point file.",
    )

    parser.add_argument("data", help="Text file with one 'lat lon alt' record per line")
    parser.add_argument("width", type=_positive_int, help="Output image width in pixels")
    parser.add_argument("-o", "--output", default="output.ppm",
                        help="Output image; .png writes PNG, anything else PPM "
                             "(default: output.ppm)")

    parser.add_argument("--max-edge-length", type=float, default=defaults.max_edge_length,
                        help="Drop triangles with an edge longer than this, in metres "
                             f"(default: {defaults.max_edge_length})")
    parser.add_argument("--max-depth", type=int, default=defaults.max_depth,
                        help=f"Quadtree depth limit (default: {defaults.max_depth})")
    parser.add_argument("--max-triangles", type=_positive_int, default=defaults.max_triangles,
                        help=f"Quadtree leaf capacity (default: {defaults.max_triangles})")
    parser.add_argument("--crs", default=defaults.target_crs,
                        help=f"Projected CRS for the points (default: {defaults.target_crs})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")

    args = parser.parse_args(argv)
    try:
        args.params = RenderParams(
            width=args.width,
            max_depth=args.max_depth,
            max_triangles=args.max_triangles,
            max_edge_length=args.max_edge_length,
            target_crs=args.crs,
        )
    except ValidationError as e:
        parser.error(str(e))
    return args


def run(args) -> int:
    params = args.params

    logger.info("Reading and projecting %s", args.data)
    try:
        points = load_points(args.data, target_crs=params.target_crs)
    except (OSError, ValueError) as e:
        logger.error("Cannot read %s: %s", args.data, e)
        return 1

    if not points:
        logger.warning("No points in %s, nothing to render", args.data)
        return 0

    first = points[0]
    logger.info("First point (projected): x=%.2f, y=%.2f, z=%.2f", first.x, first.y, first.z)

    mesh = triangulate(points, max_edge_length=params.max_edge_length)

    try:
        raster = rasterize(
            mesh, params.width,
            max_depth=params.max_depth, max_triangles=params.max_triangles,
        )
    except ValueError as e:
        logger.error("Cannot render %s: %s", args.data, e)
        return 1

    output = Path(args.output)
    writer = export_png if output.suffix.lower() == ".png" else export_ppm
    try:
        writer(raster.pixels, str(output))
    except OSError as e:
        logger.error("Cannot write %s: %s", output, e)
        return 1
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
