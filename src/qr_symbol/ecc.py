"""Block structure, Reed-Solomon codewords and interleaving (7.5, 7.6)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from . import tables
from .gf256 import ReedSolomonGenerator
from .tables import ErrorCorrectionLevel


@dataclass(frozen=True)
class Block:
    data: Tuple[int, ...]
    ecc: Tuple[int, ...]


def ecc_codewords_per_block(version: int, level: ErrorCorrectionLevel) -> int:
    return tables.ECC_CODEWORDS_PER_BLOCK[level.ordinal][version]


def block_groups(version: int, level: ErrorCorrectionLevel) -> List[Tuple[int, int]]:
    """Return ``(block count, data codewords per block)`` for each block group.

    Group 2, when present, holds blocks one data codeword longer than group 1.
    """
    num_blocks = tables.NUM_ERROR_CORRECTION_BLOCKS[level.ordinal][version]
    data_codewords = tables.num_data_codewords(version, level)
    short_len = data_codewords // num_blocks
    num_long = data_codewords % num_blocks
    groups = [(num_blocks - num_long, short_len)]
    if num_long:
        groups.append((num_long, short_len + 1))
    return groups


def split_blocks(
    data: Sequence[int], version: int, level: ErrorCorrectionLevel
) -> List[Block]:
    assert len(data) == tables.num_data_codewords(version, level)
    rs = ReedSolomonGenerator(ecc_codewords_per_block(version, level))
    blocks = []
    k = 0
    for count, length in block_groups(version, level):
        for _ in range(count):
            block_data = tuple(data[k:k + length])
            k += length
            blocks.append(Block(block_data, tuple(rs.remainder(block_data))))
    assert k == len(data)
    return blocks


def interleave(blocks: Sequence[Block]) -> List[int]:
    result = []
    max_len = max(len(block.data) for block in blocks)
    for i in range(max_len):
        for block in blocks:
            if i < len(block.data):
                result.append(block.data[i])
    for i in range(len(blocks[0].ecc)):
        for block in blocks:
            result.append(block.ecc[i])
    return result


def add_ecc_and_interleave(
    data: Sequence[int], version: int, level: ErrorCorrectionLevel
) -> List[int]:
    """Return the final codeword sequence placed into the symbol."""
    result = interleave(split_blocks(data, version, level))
    assert len(result) == tables.num_total_codewords(version)
    return result
