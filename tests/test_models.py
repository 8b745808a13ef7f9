"""
Unit tests for the domino data model.

Tests for:
- Domino: construction and map formatting
- merge / append_to_row: run-length merging within a row
- validate_board_size: board dimension checks
- ConvertResult: totals and serialization
"""

import pytest

from domino_mosaic.errors import InvalidBoardSizeError
from domino_mosaic.models import (
    BoardSize,
    Color,
    ConvertResult,
    Domino,
    append_to_row,
    merge,
    validate_board_size,
)


class TestDomino:
    """Tests for the Domino type."""

    def test_default_count_is_one(self):
        assert Domino(Color.BLACK).count == 1

    def test_str_uses_count_and_letter(self):
        assert str(Domino(Color.BLACK, 3)) == "3b"
        assert str(Domino(Color.WHITE, 12)) == "12w"

    def test_rejects_non_positive_count(self):
        with pytest.raises(ValueError, match="positive"):
            Domino(Color.WHITE, 0)

    def test_paint_values(self):
        assert Color.BLACK.paint_value == 0
        assert Color.WHITE.paint_value == 255


class TestMerge:
    """Tests for merging a new cell onto the last run of a row."""

    def test_same_color_combines_counts(self):
        result = merge(Domino(Color.BLACK, 2), Domino(Color.BLACK, 1))
        assert result == (Domino(Color.BLACK, 3),)

    def test_white_runs_combine(self):
        result = merge(Domino(Color.WHITE, 4), Domino(Color.WHITE, 3))
        assert result == (Domino(Color.WHITE, 7),)

    def test_different_colors_stay_separate_in_order(self):
        last = Domino(Color.WHITE, 2)
        new = Domino(Color.BLACK, 1)
        assert merge(last, new) == (last, new)

    def test_append_to_empty_row(self):
        row = []
        append_to_row(row, Domino(Color.WHITE))
        assert row == [Domino(Color.WHITE, 1)]

    def test_append_builds_runs(self):
        row = []
        colors = [Color.BLACK, Color.BLACK, Color.WHITE, Color.BLACK, Color.BLACK, Color.BLACK]
        for color in colors:
            append_to_row(row, Domino(color))

        assert [str(d) for d in row] == ["2b", "1w", "3b"]
        assert sum(d.count for d in row) == len(colors)

    def test_append_never_leaves_adjacent_equal_colors(self):
        row = []
        for color in [Color.WHITE, Color.WHITE, Color.BLACK, Color.WHITE, Color.WHITE]:
            append_to_row(row, Domino(color))

        for left, right in zip(row, row[1:]):
            assert left.color is not right.color


class TestValidateBoardSize:
    """Tests for board size validation."""

    def test_returns_board_size(self):
        size = validate_board_size((3, 2))
        assert size == BoardSize(columns=3, rows=2)

    @pytest.mark.parametrize("board_size", [(0, 1), (1, 0), (0, 0), (-2, 5)])
    def test_rejects_dimensions_below_one(self, board_size):
        with pytest.raises(InvalidBoardSizeError, match="at least 1"):
            validate_board_size(board_size)

    @pytest.mark.parametrize("board_size", [(1.5, 2), ("3", 2), (True, 2)])
    def test_rejects_non_integers(self, board_size):
        with pytest.raises(InvalidBoardSizeError, match="integer"):
            validate_board_size(board_size)

    @pytest.mark.parametrize("board_size", [None, (1,), (1, 2, 3)])
    def test_rejects_malformed_pairs(self, board_size):
        with pytest.raises(InvalidBoardSizeError, match="pair"):
            validate_board_size(board_size)


class TestConvertResult:
    """Tests for the ConvertResult container."""

    def test_total_count(self):
        result = ConvertResult(b"", (("2b", "1w"),), white_count=1, black_count=2)
        assert result.total_count == 3

    def test_to_dict_omits_image_bytes(self):
        result = ConvertResult(b"\xff\xd8", (("3b",), ("1w", "2b")), white_count=1, black_count=5)
        assert result.to_dict() == {
            "domino_map": [["3b"], ["1w", "2b"]],
            "white_count": 1,
            "black_count": 5,
        }

    def test_is_frozen(self):
        result = ConvertResult(b"", (), white_count=0, black_count=0)
        with pytest.raises(AttributeError):
            result.white_count = 1
