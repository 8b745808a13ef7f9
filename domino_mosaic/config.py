"""
Centralized configuration for the domino mosaic converter.

Cell geometry, the luminance threshold and the paint values are fixed
constants. Only the HTTP service settings can be overridden through
environment variables.

Geometry:
- Each domino cell is DOMINO_WIDTH x DOMINO_HEIGHT pixels
- Gap columns between domino columns are DOMINO_WIDTH pixels wide
- Below every cell (except in the last row-band) a DOMINO_WIDTH x DOMINO_WIDTH
  separator square is painted
"""

import os

# Cell geometry (pixels)
DOMINO_WIDTH = 8
DOMINO_HEIGHT = 24

# Height of one row-band: domino cell plus the separator below it
BAND_HEIGHT = DOMINO_HEIGHT + DOMINO_WIDTH

# Binarization and classification threshold (0-255)
LUMINANCE_THRESHOLD = 128

# Rec. 709 luma weights for R, G, B, in units of 1/LUMA_DIVISOR
LUMA_WEIGHTS = (2126, 7152, 722)
LUMA_DIVISOR = 10000

# Largest output raster accepted, in pixels
MAX_RASTER_PIXELS = 64 * 1024 * 1024

# Paint values for the output raster
BLACK = 0x00
WHITE = 0xFF
GAP_COLOR = 0xEE
SEPARATOR_COLOR = WHITE

# Output encoding
JPEG_QUALITY = 75
OUTPUT_EXTENSION = ".jpg"
OUTPUT_MEDIA_TYPE = "image/jpeg"


# Service settings - set via environment variables
MAX_UPLOAD_BYTES = int(os.environ.get("DOMINO_MAX_UPLOAD_BYTES", 10 * 1024 * 1024))
HOST = os.environ.get("DOMINO_HOST", "0.0.0.0")
PORT = int(os.environ.get("DOMINO_PORT", 8080))
LOG_LEVEL = os.environ.get("DOMINO_LOG_LEVEL", "INFO").upper()

# Debug output directory for intermediate rasters
DEBUG_OUTPUT_DIR = os.environ.get("DEBUG_OUTPUT_DIR", None)
