"""
Image to domino mosaic conversion pipeline.

normalize -> render -> encode, bundled into an immutable ConvertResult.
Every call owns its raster; nothing is cached or shared between calls.
"""

import logging
import os
from typing import Tuple

import cv2
import numpy as np

from .config import DEBUG_OUTPUT_DIR, JPEG_QUALITY, OUTPUT_EXTENSION
from .errors import EncodeFailureError
from .models import Board, ConvertResult, validate_board_size
from .normalize import normalize
from .render import render

logger = logging.getLogger(__name__)


def save_debug_image(name: str, image: np.ndarray) -> None:
    """Save image to debug directory if DEBUG_OUTPUT_DIR is set."""
    if DEBUG_OUTPUT_DIR is not None:
        os.makedirs(DEBUG_OUTPUT_DIR, exist_ok=True)
        path = os.path.join(DEBUG_OUTPUT_DIR, name)
        cv2.imwrite(path, image)


def encode_raster(raster: np.ndarray) -> bytes:
    """
    Encode a single-channel raster as JPEG.

    Raises:
        EncodeFailureError: If OpenCV cannot encode the raster.
    """
    try:
        success, buffer = cv2.imencode(
            OUTPUT_EXTENSION, raster, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY]
        )
    except cv2.error as e:
        raise EncodeFailureError(f"Failed to encode image: {e}") from e

    if not success:
        raise EncodeFailureError("Failed to encode image")

    return buffer.tobytes()


def format_board(board: Board) -> Tuple[Tuple[str, ...], ...]:
    """Render each row as "<count><b|w>" strings, e.g. ("3b", "2w")."""
    return tuple(tuple(str(domino) for domino in row) for row in board)


def convert(raw_bytes: bytes, board_size) -> ConvertResult:
    """
    Convert an encoded image into a domino mosaic.

    Args:
        raw_bytes: Encoded source image.
        board_size: (columns, rows) in domino cells, both >= 1.

    Returns:
        ConvertResult with the JPEG mosaic, the domino map and the
        white/black cell totals.

    Raises:
        InvalidBoardSizeError: If columns or rows is less than 1.
        InvalidInputError: If the image format cannot be guessed.
        UnsupportedFormatError: If the image cannot be decoded.
        EncodeFailureError: If the mosaic cannot be encoded.
    """
    board_size = validate_board_size(board_size)

    raster = normalize(raw_bytes, board_size)
    save_debug_image("01_normalized.png", raster)

    board, white_count, black_count = render(raster, board_size)
    save_debug_image("02_rendered.png", raster)

    image_bytes = encode_raster(raster)

    logger.debug(
        f"Converted {len(raw_bytes)} bytes to {board_size.columns}x{board_size.rows} "
        f"mosaic ({len(image_bytes)} bytes)"
    )

    return ConvertResult(
        image_bytes=image_bytes,
        domino_map=format_board(board),
        white_count=white_count,
        black_count=black_count,
    )
