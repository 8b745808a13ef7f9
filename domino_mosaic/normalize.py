"""
Image normalization for domino rendering.

Decodes raw image bytes, resizes them to the exact pixel size implied by the
board dimensions and binarizes every pixel to pure black or white. The
binarized raster is only used for sampling; the renderer overwrites all of it.
"""

import io
import logging
import struct
from typing import Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .config import (
    DOMINO_WIDTH,
    LUMA_DIVISOR,
    LUMA_WEIGHTS,
    LUMINANCE_THRESHOLD,
    MAX_RASTER_PIXELS,
    WHITE,
)
from .errors import InvalidBoardSizeError, InvalidInputError, UnsupportedFormatError
from .models import validate_board_size

logger = logging.getLogger(__name__)


def target_size(board_size) -> Tuple[int, int]:
    """
    Compute the output raster size for a board.

    Domino columns and gap columns alternate, so a board of C columns spans
    2C - 1 strips of DOMINO_WIDTH pixels. Each row-band is four DOMINO_WIDTH
    units tall (cell plus separator), minus the separator of the last band.

    Args:
        board_size: (columns, rows) in domino cells.

    Returns:
        (width, height) in pixels.

    Raises:
        InvalidBoardSizeError: If columns or rows is less than 1, or the
            raster would exceed MAX_RASTER_PIXELS.
    """
    columns, rows = validate_board_size(board_size)
    width = DOMINO_WIDTH * (2 * columns - 1)
    height = DOMINO_WIDTH * (4 * rows - 1)
    if width * height > MAX_RASTER_PIXELS:
        raise InvalidBoardSizeError(
            f"Board {columns}x{rows} needs a {width}x{height} raster, "
            f"more than {MAX_RASTER_PIXELS} pixels"
        )
    return width, height


def sniff_format(raw_bytes: bytes) -> str:
    """
    Identify the container format of an encoded image.

    Pillow only parses the header here; pixel data is not decoded.

    Raises:
        InvalidInputError: If no known format matches the bytes.
        UnsupportedFormatError: If the format matches but the stream is broken
            or declares an unreasonably large image.
    """
    if not raw_bytes:
        raise InvalidInputError("Input is empty")

    try:
        with Image.open(io.BytesIO(raw_bytes)) as probe:
            image_format = probe.format
            # Checks chunk integrity where the format supports it (e.g. PNG CRCs)
            probe.verify()
    except UnidentifiedImageError as e:
        raise InvalidInputError("Could not determine image format") from e
    except Image.DecompressionBombError as e:
        raise UnsupportedFormatError(f"Image too large: {e}") from e
    except (OSError, SyntaxError, ValueError, struct.error) as e:
        raise UnsupportedFormatError(f"Corrupt image data: {e}") from e

    if image_format is None:
        raise InvalidInputError("Could not determine image format")
    return image_format


def _decode_with_pillow(raw_bytes: bytes, image_format: str) -> np.ndarray:
    """Decode formats OpenCV has no reader for (ICO, TGA, ...) to BGR."""
    try:
        with Image.open(io.BytesIO(raw_bytes)) as pil_image:
            rgb = np.asarray(pil_image.convert("RGB"))
    except (OSError, SyntaxError, ValueError, struct.error, Image.DecompressionBombError) as e:
        raise UnsupportedFormatError(f"Failed to decode {image_format} image: {e}") from e

    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def decode_image(raw_bytes: bytes) -> np.ndarray:
    """
    Decode raw image bytes to an OpenCV BGR image.

    OpenCV decodes first; anything it cannot read falls through to Pillow.

    Raises:
        InvalidInputError: If the container format cannot be guessed.
        UnsupportedFormatError: If the payload cannot be decoded.
    """
    image_format = sniff_format(raw_bytes)

    img_array = np.frombuffer(raw_bytes, dtype=np.uint8)
    try:
        img = cv2.imdecode(img_array, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise UnsupportedFormatError(f"Failed to decode {image_format} image: {e}") from e

    if img is None or img.size == 0:
        logger.debug(f"OpenCV could not decode {image_format}, trying Pillow")
        img = _decode_with_pillow(raw_bytes, image_format)

    if img.size == 0:
        raise UnsupportedFormatError(f"Failed to decode {image_format} image")

    logger.debug(f"Decoded {image_format} image: {img.shape[1]}x{img.shape[0]}")
    return img


def to_luma(image: np.ndarray) -> np.ndarray:
    """
    Convert a BGR image to single-channel luminance.

    Uses Rec. 709 weights with integer arithmetic, truncating:
    (2126 R + 7152 G + 722 B) // 10000.
    """
    if image.ndim == 2:
        return image.copy()

    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    channels = image.astype(np.uint32)
    luma = (
        channels[:, :, 2] * r_weight
        + channels[:, :, 1] * g_weight
        + channels[:, :, 0] * b_weight
    ) // LUMA_DIVISOR
    return luma.astype(np.uint8)


def binarize(raster: np.ndarray) -> np.ndarray:
    """
    Threshold a grayscale raster in place.

    Pixels below LUMINANCE_THRESHOLD become 0, all others become 255.

    Returns:
        The same array, for chaining.
    """
    cv2.threshold(raster, LUMINANCE_THRESHOLD - 1, WHITE, cv2.THRESH_BINARY, dst=raster)
    return raster


def normalize(raw_bytes: bytes, board_size) -> np.ndarray:
    """
    Turn encoded image bytes into a binarized raster sized for the board.

    Args:
        raw_bytes: Encoded image in any format Pillow recognizes.
        board_size: (columns, rows) in domino cells.

    Returns:
        uint8 array of shape (height, width) containing only 0 and 255.

    Raises:
        InvalidBoardSizeError: If the board size is invalid (checked first).
        InvalidInputError: If the image format cannot be guessed.
        UnsupportedFormatError: If the image cannot be decoded.
    """
    width, height = target_size(board_size)

    img = decode_image(raw_bytes)

    # Nearest neighbour on pixel centres keeps hard edges for thresholding
    resized = cv2.resize(img, (width, height), interpolation=cv2.INTER_NEAREST_EXACT)

    return binarize(to_luma(resized))
