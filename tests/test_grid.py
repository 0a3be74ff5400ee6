"""Unit tests for ModuleGrid and the qrcode-backed encoder."""

import numpy as np
import pytest

from qrwriter import EncodingError, ErrorCorrectionLevel, InvalidArgument, ModuleGrid, encode


class TestModuleGrid:

    def test_init_when_square_matrix_then_side_matches(self):
        g = ModuleGrid([[1, 0], [0, 1]])
        assert g.side == 2
        assert len(g) == 2
        assert g[0, 0] and not g[0, 1]

    @pytest.mark.parametrize(
        "matrix",
        [[], [[1, 0, 1], [0, 1, 0]], [1, 0, 1], [[[1]]]],
    )
    def test_init_when_not_square_2d_then_raises_invalid_argument(self, matrix):
        with pytest.raises(InvalidArgument):
            ModuleGrid(matrix)

    def test_matrix_when_written_then_read_only(self):
        g = ModuleGrid(np.eye(3, dtype=bool))
        with pytest.raises(ValueError):
            g.matrix[0, 0] = False

    def test_init_when_source_mutated_then_grid_unchanged(self):
        source = np.zeros((3, 3), dtype=bool)
        g = ModuleGrid(source)
        source[1, 1] = True
        assert not g[1, 1]

    def test_from_rows_when_bit_strings_then_parsed(self):
        g = ModuleGrid.from_rows(["10", "01"])
        assert g == ModuleGrid([[True, False], [False, True]])

    def test_from_rows_when_invalid_characters_then_raises(self):
        with pytest.raises(InvalidArgument):
            ModuleGrid.from_rows(["1x", "01"])

    def test_first_mismatch_when_equal_then_none(self, grid):
        assert grid.first_mismatch(ModuleGrid(grid.matrix)) is None

    def test_first_mismatch_when_cells_differ_then_first_in_row_major_order(self, grid):
        altered = grid.matrix.copy()
        altered[12, 3] = not altered[12, 3]
        altered[4, 18] = not altered[4, 18]
        assert grid.first_mismatch(ModuleGrid(altered)) == (4, 18)

    def test_first_mismatch_when_sides_differ_then_raises(self, grid):
        with pytest.raises(InvalidArgument):
            grid.first_mismatch(ModuleGrid(np.zeros((25, 25))))


class TestEncode:

    def test_encode_when_short_text_then_version_1_grid(self):
        g = encode("hello", ErrorCorrectionLevel.LOW)
        assert g.side == 21
        # Top-left finder pattern
        assert g[0, :7].all()
        assert not g[1, 1:6].any()

    def test_encode_when_same_input_then_same_grid(self):
        assert encode("determinism", "high") == encode("determinism", "high")

    def test_encode_when_higher_level_then_grid_not_smaller(self):
        text = "https://example.com/some/longer/path?with=query"
        assert encode(text, "high").side >= encode(text, "low").side

    def test_encode_when_text_not_representable_then_raises_encoding_error(self):
        with pytest.raises(EncodingError, match="cannot encode text"):
            encode("héllo ☃", "low", encoding="ascii")

    def test_encode_when_text_too_long_then_raises_encoding_error(self):
        with pytest.raises(EncodingError, match="does not fit"):
            encode("x" * 8000, "high")
