from __future__ import annotations

import pytest

from qr_symbol import tables
from qr_symbol.matrix import MatrixBuilder, ModuleRole, ZigzagCursor, format_info_coordinates
from qr_symbol.tables import ErrorCorrectionLevel


def _unset_cells(builder: MatrixBuilder) -> int:
    return sum(1 for line in builder.roles for role in line if role is ModuleRole.UNSET)


@pytest.mark.parametrize("version", range(1, 41))
def test_data_region_matches_raw_module_count(version: int) -> None:
    builder = MatrixBuilder(version)
    assert builder.size == 4 * version + 17
    assert _unset_cells(builder) == tables.num_raw_data_modules(version)
    assert len(list(ZigzagCursor(builder.roles))) == tables.num_raw_data_modules(version)


def test_cursor_order_for_version_1() -> None:
    cells = list(ZigzagCursor(MatrixBuilder(1).roles))
    assert cells[:4] == [(20, 20), (20, 19), (19, 20), (19, 19)]
    # The first strip runs up to row 9, then the next strip runs down from row 9.
    assert cells[23] == (9, 19)
    assert cells[24:26] == [(9, 18), (9, 17)]
    assert len(cells) == 208
    assert len(set(cells)) == 208
    assert all(col != 6 for _, col in cells)


def test_cursor_skips_reserved_cells() -> None:
    builder = MatrixBuilder(7)
    for row, col in ZigzagCursor(builder.roles):
        assert builder.roles[row][col] is ModuleRole.UNSET


def test_finder_separator_and_timing_patterns() -> None:
    builder = MatrixBuilder(2)
    m = builder.modules
    size = builder.size
    assert all(m[0][col] for col in range(7))
    assert not m[1][1] and m[2][2] and m[3][3] and m[4][4] and not m[5][5]
    assert not any(m[7][col] for col in range(8))
    assert not any(m[row][size - 8] for row in range(8))
    assert all(m[size - 1][col] for col in range(7))
    assert [m[6][col] for col in range(8, size - 8)] == [col % 2 == 0 for col in range(8, size - 8)]
    assert [m[row][6] for row in range(8, size - 8)] == [row % 2 == 0 for row in range(8, size - 8)]
    assert m[size - 8][8]


def test_alignment_pattern_for_version_2() -> None:
    builder = MatrixBuilder(2)
    m = builder.modules
    assert m[18][18]
    assert not m[17][17] and not m[19][18]
    assert m[16][16] and m[20][20]
    assert builder.roles[18][18] is ModuleRole.RESERVED


def test_version_1_has_no_alignment_pattern() -> None:
    builder = MatrixBuilder(1)
    assert builder.roles[14][14] is ModuleRole.UNSET


def test_version_information_blocks() -> None:
    builder = MatrixBuilder(7)
    bits = tables.VERSION_INFO[7]
    assert bits == 0x07C94
    size = builder.size
    for i in range(18):
        expected = (bits >> i) & 1 == 1
        assert builder.modules[i // 3][size - 11 + i % 3] is expected
        assert builder.modules[size - 11 + i % 3][i // 3] is expected


def test_format_information_values() -> None:
    assert tables.FORMAT_INFO[(ErrorCorrectionLevel.M, 0)] == 0x5412
    assert tables.FORMAT_INFO[(ErrorCorrectionLevel.L, 4)] == 0b110011000101111


def test_format_areas_are_reserved_and_disjoint() -> None:
    builder = MatrixBuilder(1)
    first, second = format_info_coordinates(builder.size)
    assert len(first) == len(second) == 15
    assert not set(first) & set(second)
    for row, col in first + second:
        assert builder.roles[row][col] is ModuleRole.RESERVED


def test_place_codewords_fills_data_region_only() -> None:
    builder = MatrixBuilder(1)
    reserved_before = {
        (row, col): builder.modules[row][col]
        for row in range(builder.size)
        for col in range(builder.size)
        if builder.roles[row][col] is ModuleRole.RESERVED
    }
    builder.place_codewords([0xFF] * 26)
    assert _unset_cells(builder) == 0
    for (row, col), value in reserved_before.items():
        assert builder.modules[row][col] is value
    assert all(
        builder.modules[row][col]
        for row, col in [(20, 20), (20, 19), (9, 18)]
    )


def test_remainder_cells_stay_light() -> None:
    builder = MatrixBuilder(2)
    builder.place_codewords([0xFF] * tables.num_total_codewords(2))
    cells = list(ZigzagCursor(builder.roles))
    assert len(cells) - tables.num_total_codewords(2) * 8 == 7
    assert not any(builder.modules[row][col] for row, col in cells[-7:])


def test_place_codewords_rejects_wrong_length() -> None:
    with pytest.raises(AssertionError):
        MatrixBuilder(1).place_codewords([0] * 25)


def test_version_out_of_range() -> None:
    with pytest.raises(ValueError):
        MatrixBuilder(41)
