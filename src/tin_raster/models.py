"""Pydantic domain models for points, triangles, meshes and bounding boxes."""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Point(BaseModel):
    """A projected surface sample: planar x/y in meters, altitude z in meters."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float


class Triangle(BaseModel):
    """Three indices into the owning mesh's point list."""
    model_config = ConfigDict(frozen=True)

    p1: int = Field(ge=0)
    p2: int = Field(ge=0)
    p3: int = Field(ge=0)

    @property
    def indices(self) -> tuple[int, int, int]:
        return (self.p1, self.p2, self.p3)


class BoundingBox(BaseModel):
    """Axis-aligned box, inclusive on every edge."""
    model_config = ConfigDict(frozen=True)

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @model_validator(mode="after")
    def check_min_le_max(self) -> "BoundingBox":
        if self.min_x > self.max_x:
            raise ValueError(f"min_x ({self.min_x}) must not exceed max_x ({self.max_x})")
        if self.min_y > self.max_y:
            raise ValueError(f"min_y ({self.min_y}) must not exceed max_y ({self.max_y})")
        return self

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def midpoint(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def intersects(self, other: "BoundingBox") -> bool:
        return not (
            other.min_x > self.max_x
            or other.max_x < self.min_x
            or other.min_y > self.max_y
            or other.max_y < self.min_y
        )


class Mesh(BaseModel):
    """Points plus the triangles connecting them. Read-only once built."""
    model_config = ConfigDict(frozen=True)

    points: list[Point] = Field(default_factory=list)
    triangles: list[Triangle] = Field(default_factory=list)

    @model_validator(mode="after")
    def triangle_indices_must_be_valid(self) -> "Mesh":
        n_points = len(self.points)
        for i, tri in enumerate(self.triangles):
            idx = tri.indices
            if len(set(idx)) != 3:
                raise ValueError(f"Triangle {i} repeats a vertex: {idx}")
            for p in idx:
                if p >= n_points:
                    raise ValueError(
                        f"Triangle {i} references point {p} but only {n_points} points exist"
                    )
        return self

    @classmethod
    def from_arrays(cls, xyz: np.ndarray, faces: np.ndarray) -> "Mesh":
        """Build a mesh from an (n, 3) coordinate array and an (m, 3) index array."""
        xyz = np.asarray(xyz, dtype=np.float64).reshape(-1, 3)
        faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
        points = [Point(x=float(x), y=float(y), z=float(z)) for x, y, z in xyz]
        triangles = [Triangle(p1=int(a), p2=int(b), p3=int(c)) for a, b, c in faces]
        return cls(points=points, triangles=triangles)
