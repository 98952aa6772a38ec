"""Binary PPM (P6) export."""

import logging
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)


def ppm_header(width: int, height: int) -> bytes:
    return f"P6\n{width} {height}\n255\n".encode("ascii")


def export_ppm(pixels: np.ndarray, output_path: str) -> dict:
    """Write an (height, width, 3) uint8 RGB array as a binary PPM file.

    A file left half-written by a failed write is removed before the error
    propagates. If the file cannot be opened, an existing file at
    ``output_path`` is left alone.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an (height, width, 3) pixel array, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}")

    height, width = pixels.shape[:2]
    path = Path(output_path)
    with open(path, "wb") as f:
        try:
            f.write(ppm_header(width, height))
            f.write(np.ascontiguousarray(pixels).tobytes())
        except OSError:
            f.close()
            path.unlink(missing_ok=True)
            raise

    logger.info("Image saved to %s", path)
    return {"success": True, "filepath": str(output_path), "width": width, "height": height}
