"""tin-raster: render triangulated elevation surfaces to shaded raster images."""

__version__ = "0.1.0"
