"""Bounding-box quadtree answering "which triangle covers (x, y)" queries.

A triangle is pushed into every child whose box intersects the triangle's
bounding box, so one triangle may live in several leaves. ``find`` relies on
that: it descends into a single child per level and never looks at siblings.
Switching ``insert`` to an exact triangle/box overlap test would require
``find`` to visit every candidate child.
"""

from typing import Iterator, Optional, Sequence

from ..models import BoundingBox, Point, Triangle
from .geometry import point_in_triangle, triangle_bounds

MAX_DEPTH = 10
MAX_TRIANGLES = 1500  # leaf capacity

NW, NE, SW, SE = 0, 1, 2, 3


class QuadTree:
    """One quadtree node: a leaf holding triangles, or four children."""

    def __init__(
        self,
        bounds: BoundingBox,
        depth: int = 0,
        max_depth: int = MAX_DEPTH,
        max_triangles: int = MAX_TRIANGLES,
    ):
        self.bounds = bounds
        self.depth = depth
        self.max_depth = max_depth
        self.max_triangles = max_triangles
        self.triangles: list[Triangle] = []
        self.children: Optional[list["QuadTree"]] = None  # [NW, NE, SW, SE]

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def _subdivide(self) -> None:
        b = self.bounds
        mid_x, mid_y = b.midpoint
        quadrants = [
            BoundingBox(min_x=b.min_x, min_y=mid_y, max_x=mid_x, max_y=b.max_y),  # NW
            BoundingBox(min_x=mid_x, min_y=mid_y, max_x=b.max_x, max_y=b.max_y),  # NE
            BoundingBox(min_x=b.min_x, min_y=b.min_y, max_x=mid_x, max_y=mid_y),  # SW
            BoundingBox(min_x=mid_x, min_y=b.min_y, max_x=b.max_x, max_y=mid_y),  # SE
        ]
        self.children = [
            QuadTree(q, self.depth + 1, self.max_depth, self.max_triangles)
            for q in quadrants
        ]

    def insert(self, triangle: Triangle, points: Sequence[Point]) -> None:
        """Store ``triangle`` in every leaf whose box meets its bounding box."""
        self._insert(triangle, triangle_bounds(triangle, points), points)

    def _insert(
        self, triangle: Triangle, tri_bounds: BoundingBox, points: Sequence[Point]
    ) -> None:
        if not self.bounds.intersects(tri_bounds):
            return

        if self.is_leaf and (
            len(self.triangles) < self.max_triangles or self.depth >= self.max_depth
        ):
            self.triangles.append(triangle)
            return

        if self.is_leaf:
            self._subdivide()
            for stored in self.triangles:
                stored_bounds = triangle_bounds(stored, points)
                for child in self.children:
                    child._insert(stored, stored_bounds, points)
            self.triangles = []

        for child in self.children:
            child._insert(triangle, tri_bounds, points)

    def find(self, x: float, y: float, points: Sequence[Point]) -> Optional[Triangle]:
        """Return the first stored triangle containing (x, y), or None."""
        if not self.bounds.contains(x, y):
            return None

        node = self
        while node.children is not None:
            mid_x, mid_y = node.bounds.midpoint
            if x <= mid_x:
                node = node.children[NW] if y >= mid_y else node.children[SW]
            else:
                node = node.children[NE] if y >= mid_y else node.children[SE]

        for t in node.triangles:
            if point_in_triangle(x, y, points[t.p1], points[t.p2], points[t.p3]):
                return t
        return None

    def iter_leaves(self) -> Iterator["QuadTree"]:
        if self.children is None:
            yield self
            return
        for child in self.children:
            yield from child.iter_leaves()

    def stats(self) -> dict:
        """Node/leaf counts, deepest leaf, and stored triangle references."""
        nodes = 0
        leaves = 0
        deepest = 0
        stored = 0
        stack = [self]
        while stack:
            node = stack.pop()
            nodes += 1
            if node.children is None:
                leaves += 1
                deepest = max(deepest, node.depth)
                stored += len(node.triangles)
            else:
                stack.extend(node.children)
        return {
            "nodes": nodes,
            "leaves": leaves,
            "max_depth": deepest,
            "triangle_refs": stored,
        }


def build_quadtree(
    bounds: BoundingBox,
    triangles: Sequence[Triangle],
    points: Sequence[Point],
    max_depth: int = MAX_DEPTH,
    max_triangles: int = MAX_TRIANGLES,
) -> QuadTree:
    """Create a root over ``bounds`` and insert every triangle."""
    tree = QuadTree(bounds, max_depth=max_depth, max_triangles=max_triangles)
    for t in triangles:
        tree.insert(t, points)
    return tree
