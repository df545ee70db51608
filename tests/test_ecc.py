from __future__ import annotations

import pytest

from qr_symbol import ecc, tables
from qr_symbol.tables import ErrorCorrectionLevel


@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
def test_blocks_fill_total_codeword_capacity(level: ErrorCorrectionLevel) -> None:
    for version in range(1, 41):
        per_block_ecc = ecc.ecc_codewords_per_block(version, level)
        total = sum(
            count * (length + per_block_ecc) for count, length in ecc.block_groups(version, level)
        )
        assert total == tables.num_total_codewords(version)


@pytest.mark.parametrize(
    ("version", "level", "groups"),
    [
        (1, ErrorCorrectionLevel.M, [(1, 16)]),
        (5, ErrorCorrectionLevel.Q, [(2, 15), (2, 16)]),
        (10, ErrorCorrectionLevel.L, [(2, 68), (2, 69)]),
        (40, ErrorCorrectionLevel.H, [(20, 15), (61, 16)]),
    ],
)
def test_block_groups_match_standard_table(version, level, groups) -> None:
    assert ecc.block_groups(version, level) == groups


def test_iso_example_error_correction_codewords() -> None:
    data = [0x10, 0x20, 0x0C, 0x56, 0x61, 0x80, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11]
    blocks = ecc.split_blocks(data, 1, ErrorCorrectionLevel.M)
    assert len(blocks) == 1
    assert list(blocks[0].ecc) == [0xA5, 0x24, 0xD4, 0xC1, 0xED, 0x36, 0xC7, 0x87, 0x2C, 0x55]


def test_interleave_reads_blocks_round_robin() -> None:
    blocks = [ecc.Block((1, 2), (91, 92)), ecc.Block((3, 4, 5), (93, 94))]
    assert ecc.interleave(blocks) == [1, 3, 2, 4, 5, 91, 93, 92, 94]


def test_add_ecc_and_interleave_with_two_groups() -> None:
    level = ErrorCorrectionLevel.Q
    data = list(range(62))
    result = ecc.add_ecc_and_interleave(data, 5, level)
    assert len(result) == 134
    # Round-robin over blocks of 15, 15, 16, 16 data codewords.
    assert result[:8] == [0, 15, 30, 46, 1, 16, 31, 47]
    # The last data codeword comes from the long blocks only.
    assert result[60:62] == [45, 61]
    blocks = ecc.split_blocks(data, 5, level)
    assert result[62:66] == [block.ecc[0] for block in blocks]
