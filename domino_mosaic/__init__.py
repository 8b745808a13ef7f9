"""
Convert images into black and white domino mosaics.
"""

from .errors import (
    ConvertError,
    EncodeFailureError,
    InvalidBoardSizeError,
    InvalidInputError,
    UnsupportedFormatError,
)
from .models import BoardSize, Color, ConvertResult, Domino, merge
from .pipeline import convert

__all__ = [
    "convert",
    "BoardSize",
    "Color",
    "ConvertResult",
    "Domino",
    "merge",
    "ConvertError",
    "EncodeFailureError",
    "InvalidBoardSizeError",
    "InvalidInputError",
    "UnsupportedFormatError",
]
