"""
Domino grid rendering.

Walks a binarized raster cell by cell, classifies each domino cell by its
sampled luminance, builds the run-length domino map and repaints the raster
in place:

    columns:  D G D G D      D = domino column, G = gap column
    band 0:   cell row (DOMINO_HEIGHT px) + separator row (DOMINO_WIDTH px)
    band 1:   ...
    last:     cell row only
"""

import logging
from typing import Tuple

import numpy as np

from .config import (
    BAND_HEIGHT,
    DOMINO_HEIGHT,
    DOMINO_WIDTH,
    GAP_COLOR,
    LUMINANCE_THRESHOLD,
    SEPARATOR_COLOR,
)
from .models import Board, Color, Domino, Row, append_to_row, validate_board_size
from .normalize import target_size

logger = logging.getLogger(__name__)


def cell_metric(cell: np.ndarray) -> int:
    """
    Luminance metric of one domino cell.

    Computed as (sum // DOMINO_WIDTH) * DOMINO_HEIGHT. This is not a mean:
    the division happens before the multiplication, which shifts the
    effective threshold far below mid-gray. Kept for output compatibility.
    """
    total = int(cell.sum(dtype=np.uint64))
    return total // DOMINO_WIDTH * DOMINO_HEIGHT


def classify_cell(cell: np.ndarray) -> Domino:
    """Classify a sampled domino cell as a single black or white domino."""
    if cell_metric(cell) < LUMINANCE_THRESHOLD:
        return Domino(Color.BLACK)
    return Domino(Color.WHITE)


def render(raster: np.ndarray, board_size) -> Tuple[Board, int, int]:
    """
    Classify and repaint a normalized raster.

    Each cell is read, classified, merged into its row and only then
    painted, so sampling never sees already-painted pixels.

    Args:
        raster: Binarized uint8 raster of shape target_size(board_size)[::-1].
            Modified in place.
        board_size: (columns, rows) in domino cells.

    Returns:
        (board, white_count, black_count)

    Raises:
        InvalidBoardSizeError: If the board size is invalid.
        ValueError: If the raster does not match the board size.
    """
    columns, rows = validate_board_size(board_size)
    width, height = target_size((columns, rows))
    if raster.shape[:2] != (height, width):
        raise ValueError(
            f"Raster shape {raster.shape[:2]} does not match board "
            f"{columns}x{rows} (expected {(height, width)})"
        )

    last_band_top = height - DOMINO_HEIGHT
    board: Board = []

    for top in range(0, height, BAND_HEIGHT):
        row: Row = []
        bottom = top + DOMINO_HEIGHT

        for column_index, left in enumerate(range(0, width, DOMINO_WIDTH)):
            right = left + DOMINO_WIDTH
            cell = raster[top:bottom, left:right]

            if column_index % 2 == 0:
                domino = classify_cell(cell)
                append_to_row(row, domino)
                cell[:] = domino.color.paint_value
            else:
                cell[:] = GAP_COLOR

            if top != last_band_top:
                raster[bottom:bottom + DOMINO_WIDTH, left:right] = SEPARATOR_COLOR

        board.append(row)

    white_count, black_count = count_colors(board)
    logger.debug(
        f"Rendered {columns}x{rows} board: {white_count} white, {black_count} black"
    )
    return board, white_count, black_count


def count_colors(board: Board) -> Tuple[int, int]:
    """
    Total white and black cells across a board.

    Returns:
        (white_count, black_count)
    """
    white_count = 0
    black_count = 0
    for row in board:
        for domino in row:
            if domino.color is Color.WHITE:
                white_count += domino.count
            else:
                black_count += domino.count
    return white_count, black_count
