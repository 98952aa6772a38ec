"""Pydantic return models for core computation functions."""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from tin_raster.models import BoundingBox


class RasterResult(BaseModel):
    """Return type for Rasterizer.render."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    pixels: np.ndarray
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    min_z: float
    max_z: float
    bounds: BoundingBox
    covered_pixels: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def pixels_must_match_dimensions(self) -> "RasterResult":
        expected = (self.height, self.width, 3)
        if self.pixels.shape != expected:
            raise ValueError(f"pixels has shape {self.pixels.shape}, expected {expected}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")
        return self

    def to_bytes(self) -> bytes:
        """Row-major, top row first, RGB interleaved."""
        return np.ascontiguousarray(self.pixels).tobytes()
