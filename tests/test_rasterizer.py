"""Tests for the rasterizer and its geometry helpers."""

import logging

import numpy as np
import pytest

from tin_raster.core.colormap import color_for
from tin_raster.core.geometry import interpolate_z, mesh_extent, point_in_triangle
from tin_raster.core.rasterizer import Rasterizer, image_height, rasterize
from tin_raster.core.shading import shade_factor
from tin_raster.models import Mesh, Point, Triangle


def _unit_square():
    """Unit square with corner altitudes 0..3, split along the (0,0)-(1,1) diagonal."""
    points = [
        Point(x=0, y=0, z=0),
        Point(x=1, y=0, z=1),
        Point(x=1, y=1, z=2),
        Point(x=0, y=1, z=3),
    ]
    triangles = [Triangle(p1=0, p2=1, p3=2), Triangle(p1=0, p2=2, p3=3)]
    return Mesh(points=points, triangles=triangles)


def _shaded(color, shade):
    return tuple(int(max(0.0, min(255.0, c * shade))) for c in color)


class TestInterpolateZ:
    def test_vertices_return_their_altitude(self):
        a, b, c = Point(x=0, y=0, z=10), Point(x=4, y=0, z=20), Point(x=0, y=4, z=30)
        assert interpolate_z(0, 0, a, b, c) == pytest.approx(10)
        assert interpolate_z(4, 0, a, b, c) == pytest.approx(20)
        assert interpolate_z(0, 4, a, b, c) == pytest.approx(30)

    def test_planar_interpolation(self):
        # z = 2x + 3y + 1
        a, b, c = Point(x=0, y=0, z=1), Point(x=4, y=0, z=9), Point(x=0, y=4, z=13)
        assert interpolate_z(1, 2, a, b, c) == pytest.approx(9)

    def test_degenerate_triangle_returns_none(self):
        a, b, c = Point(x=0, y=0, z=1), Point(x=1, y=1, z=2), Point(x=2, y=2, z=3)
        assert interpolate_z(1, 1, a, b, c) is None


class TestMeshExtent:
    def test_bounds_and_altitude_range(self):
        bounds, min_z, max_z = mesh_extent(_unit_square().points)
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (0, 0, 1, 1)
        assert (min_z, max_z) == (0, 3)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            mesh_extent([])


class TestImageHeight:
    @pytest.mark.parametrize("width", [1, 2, 3, 7, 100, 801])
    def test_ten_by_five_mesh_is_half_as_tall(self, width):
        assert image_height(width, 10.0, 5.0) == int(np.floor(width * 0.5 + 0.5))

    def test_rounds_half_up(self):
        assert image_height(5, 10.0, 5.0) == 3

    def test_at_least_one_row(self):
        assert image_height(10, 1000.0, 1.0) == 1


class TestRasterize:
    def test_empty_mesh_produces_nothing(self):
        assert rasterize(Mesh(), 10) is None

    def test_degenerate_bounds_raise(self):
        points = [Point(x=0, y=0, z=0), Point(x=0, y=1, z=1), Point(x=0, y=2, z=2)]
        mesh = Mesh(points=points, triangles=[Triangle(p1=0, p2=1, p3=2)])
        with pytest.raises(ValueError, match="Invalid mesh dimensions"):
            rasterize(mesh, 10)

    def test_single_point_raises(self):
        with pytest.raises(ValueError):
            rasterize(Mesh(points=[Point(x=1, y=1, z=1)]), 10)

    def test_non_positive_width_raises(self):
        with pytest.raises(ValueError, match="width"):
            rasterize(_unit_square(), 0)

    def test_output_dimensions_follow_aspect_ratio(self):
        points = [
            Point(x=0, y=0, z=0), Point(x=10, y=0, z=0),
            Point(x=10, y=5, z=0), Point(x=0, y=5, z=0),
        ]
        triangles = [Triangle(p1=0, p2=1, p3=2), Triangle(p1=0, p2=2, p3=3)]
        result = rasterize(Mesh(points=points, triangles=triangles), 40)
        assert (result.width, result.height) == (40, 20)
        assert result.pixels.shape == (20, 40, 3)
        assert result.pixels.dtype == np.uint8

    def test_unit_square_end_to_end(self):
        mesh = _unit_square()
        result = rasterize(mesh, 2)
        assert (result.width, result.height) == (2, 2)
        assert (result.min_z, result.max_z) == (0, 3)
        assert result.covered_pixels == 4

        pts = mesh.points
        # Row 0 is the top (y = 0.75), row 1 the bottom (y = 0.25).
        # Lower-right triangle: z = x + y; upper-left triangle: z = 3y - x.
        expected_z = {(0, 0): 2.0, (0, 1): 1.5, (1, 0): 0.5, (1, 1): 1.0}
        for (row, col), z in expected_z.items():
            x = (col + 0.5) / 2
            y = 1 - (row + 0.5) / 2
            tri = next(
                t for t in mesh.triangles
                if point_in_triangle(x, y, pts[t.p1], pts[t.p2], pts[t.p3])
            )
            actual_z = interpolate_z(x, y, pts[tri.p1], pts[tri.p2], pts[tri.p3])
            assert actual_z == pytest.approx(z)
            shade = shade_factor(pts[tri.p1], pts[tri.p2], pts[tri.p3])
            expected = _shaded(color_for(actual_z, 0.0, 3.0), shade)
            assert tuple(result.pixels[row, col]) == expected

    def test_corner_altitudes_hit_end_stops(self):
        assert color_for(0.0, 0.0, 3.0) == (0, 0, 128)
        assert color_for(3.0, 0.0, 3.0) == (255, 255, 255)

    def test_uncovered_pixels_are_black(self):
        # One triangle covering the lower-right half of the square
        mesh = Mesh(points=_unit_square().points, triangles=[Triangle(p1=0, p2=1, p3=2)])
        result = rasterize(mesh, 4)
        assert tuple(result.pixels[0, 0]) == (0, 0, 0)
        assert tuple(result.pixels[3, 3]) != (0, 0, 0)
        assert 0 < result.covered_pixels < 16

    def test_degenerate_triangle_leaves_background(self):
        points = [
            Point(x=0, y=0, z=0), Point(x=1, y=1, z=1), Point(x=2, y=2, z=2),
            Point(x=2, y=0, z=0),
        ]
        mesh = Mesh(points=points, triangles=[Triangle(p1=0, p2=1, p3=2)])
        result = rasterize(mesh, 8)
        assert result.covered_pixels == 0
        assert not result.pixels.any()

    def test_rendering_is_idempotent(self):
        mesh = _unit_square()
        first = rasterize(mesh, 37)
        second = rasterize(mesh, 37)
        assert first.to_bytes() == second.to_bytes()

    def test_small_leaf_capacity_gives_same_image(self):
        n = 9
        points = [Point(x=float(c), y=float(r), z=float((r * c) % 5)) for r in range(n) for c in range(n)]
        triangles = []
        for r in range(n - 1):
            for c in range(n - 1):
                a = r * n + c
                triangles.append(Triangle(p1=a, p2=a + 1, p3=a + n + 1))
                triangles.append(Triangle(p1=a, p2=a + n + 1, p3=a + n))
        mesh = Mesh(points=points, triangles=triangles)
        default = rasterize(mesh, 33)
        tiny = rasterize(mesh, 33, max_depth=6, max_triangles=2)
        assert default.to_bytes() == tiny.to_bytes()

    def test_logs_quadtree_and_dimensions(self, caplog):
        with caplog.at_level(logging.INFO, logger="tin_raster.core.rasterizer"):
            rasterize(_unit_square(), 2)
        messages = [r.getMessage() for r in caplog.records]
        assert any("Quadtree built" in m for m in messages)
        assert any("2x2" in m for m in messages)


class TestRasterizerRows:
    def test_rows_assemble_into_render(self):
        rasterizer = Rasterizer(_unit_square(), 9)
        rows = np.stack([rasterizer.render_row(r)[0] for r in range(rasterizer.height)])
        assert np.array_equal(rows, rasterizer.render().pixels)

    def test_top_row_is_north(self):
        rasterizer = Rasterizer(_unit_square(), 10)
        result = rasterizer.render()
        # Altitude rises towards the north-west corner (z=3), so the top-left
        # pixel sits higher on the ramp than the bottom-left one.
        b = rasterizer.bounds
        x = b.min_x + 0.5 * rasterizer.pixel_size_x
        top = rasterizer.pixel_color(x, b.max_y - 0.5 * rasterizer.pixel_size_y)
        bottom = rasterizer.pixel_color(
            x, b.max_y - (rasterizer.height - 0.5) * rasterizer.pixel_size_y
        )
        assert tuple(result.pixels[0, 0]) == top
        assert tuple(result.pixels[-1, 0]) == bottom
        assert top != bottom
