"""PNG export through Pillow."""

import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def export_png(pixels: np.ndarray, output_path: str) -> dict:
    """Write an (height, width, 3) uint8 RGB array as a PNG file."""
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError(
            f"Expected an (height, width, 3) uint8 pixel array, got {pixels.shape} {pixels.dtype}"
        )
    height, width = pixels.shape[:2]
    Image.fromarray(pixels).save(output_path, format="PNG")
    logger.info("Image saved to %s", output_path)
    return {"success": True, "filepath": str(output_path), "width": width, "height": height}
