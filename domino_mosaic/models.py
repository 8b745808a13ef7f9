"""
Data model for domino mosaics.

A Domino is a run of consecutive same-colored cells within one board row.
Rows are lists of Dominoes (no two neighbours share a color), and a Board is
the list of rows from top to bottom.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple

from .config import BLACK, WHITE
from .errors import InvalidBoardSizeError


class Color(Enum):
    """Domino face color."""
    BLACK = "b"
    WHITE = "w"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def paint_value(self) -> int:
        """Luminance used to paint a cell of this color."""
        return BLACK if self is Color.BLACK else WHITE


@dataclass(frozen=True)
class Domino:
    """
    A merged run of same-colored domino cells.

    Attributes:
        color: Face color shared by every cell in the run
        count: Number of cells merged into this run (>= 1)
    """
    color: Color
    count: int = 1

    def __post_init__(self):
        if self.count < 1:
            raise ValueError(f"Domino count must be positive, got {self.count}")

    def __str__(self) -> str:
        return f"{self.count}{self.color.letter}"


Row = List[Domino]
Board = List[Row]


def merge(last: Domino, new: Domino) -> Tuple[Domino, ...]:
    """
    Merge a new domino cell onto the last run of a row.

    Args:
        last: The current last entry of the row
        new: The newly classified entry

    Returns:
        A single combined Domino when both share a color, otherwise
        (last, new) unchanged and in order.
    """
    if last.color is new.color:
        return (Domino(last.color, last.count + new.count),)
    return (last, new)


def append_to_row(row: Row, domino: Domino) -> None:
    """Append a domino to a row in place, merging with the last run."""
    if not row:
        row.append(domino)
        return
    row.extend(merge(row.pop(), domino))


class BoardSize(NamedTuple):
    """Requested board dimensions, in domino cells."""
    columns: int
    rows: int


def validate_board_size(board_size) -> BoardSize:
    """
    Validate a (columns, rows) pair.

    Raises:
        InvalidBoardSizeError: If either dimension is not an integer >= 1.
    """
    try:
        columns, rows = board_size
    except (TypeError, ValueError):
        raise InvalidBoardSizeError(f"Board size must be a (columns, rows) pair, got {board_size!r}")

    for name, value in (("columns", columns), ("rows", rows)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidBoardSizeError(f"Board {name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidBoardSizeError(f"Board {name} must be at least 1, got {value}")

    return BoardSize(columns, rows)


@dataclass(frozen=True)
class ConvertResult:
    """
    Final output of a conversion.

    Attributes:
        image_bytes: Encoded mosaic image (JPEG)
        domino_map: One tuple per board row of "<count><b|w>" strings
        white_count: Total number of white domino cells
        black_count: Total number of black domino cells
    """
    image_bytes: bytes
    domino_map: Tuple[Tuple[str, ...], ...]
    white_count: int
    black_count: int

    @property
    def total_count(self) -> int:
        return self.white_count + self.black_count

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization (image bytes omitted)."""
        return {
            "domino_map": [list(row) for row in self.domino_map],
            "white_count": self.white_count,
            "black_count": self.black_count,
        }
