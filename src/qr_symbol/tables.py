"""Constant data of ISO/IEC 18004 used throughout the encoder.

Every table here is built once at import time and only read afterwards.
Section numbers refer to ISO/IEC 18004:2015.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from .errors import InvalidOption

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorCorrectionLevel(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def ordinal(self) -> int:
        """Column index into the per-level tables below."""
        return _LEVEL_ORDINALS[self]

    @property
    def format_bits(self) -> int:
        """2-bit indicator written into the format information (7.9.1, Table 12)."""
        return _LEVEL_FORMAT_BITS[self]

    @classmethod
    def parse(cls, value: object) -> "ErrorCorrectionLevel":
        if isinstance(value, ErrorCorrectionLevel):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _LEVEL_ALIASES:
                return _LEVEL_ALIASES[key]
        raise InvalidOption(f"unknown error correction level: {value!r}")


_LEVEL_ORDINALS = {
    ErrorCorrectionLevel.L: 0,
    ErrorCorrectionLevel.M: 1,
    ErrorCorrectionLevel.Q: 2,
    ErrorCorrectionLevel.H: 3,
}

_LEVEL_FORMAT_BITS = {
    ErrorCorrectionLevel.L: 0b01,
    ErrorCorrectionLevel.M: 0b00,
    ErrorCorrectionLevel.Q: 0b11,
    ErrorCorrectionLevel.H: 0b10,
}

_LEVEL_ALIASES = {
    "l": ErrorCorrectionLevel.L,
    "low": ErrorCorrectionLevel.L,
    "m": ErrorCorrectionLevel.M,
    "medium": ErrorCorrectionLevel.M,
    "q": ErrorCorrectionLevel.Q,
    "quartile": ErrorCorrectionLevel.Q,
    "h": ErrorCorrectionLevel.H,
    "high": ErrorCorrectionLevel.H,
}


# Mode indicators (7.4.1, Table 2).
MODE_NUMERIC = 0b0001
MODE_ALPHANUMERIC = 0b0010
MODE_BYTE = 0b0100

# Character count indicator widths per version tier (7.4.1, Table 3).
# Tier 0: versions 1-9, tier 1: versions 10-26, tier 2: versions 27-40.
CHAR_COUNT_BITS: Dict[int, Tuple[int, int, int]] = {
    MODE_NUMERIC: (10, 12, 14),
    MODE_ALPHANUMERIC: (9, 11, 13),
    MODE_BYTE: (8, 16, 16),
}

TIER_FIRST_VERSIONS = (1, 10, 27)


def version_tier(version: int) -> int:
    if version <= 9:
        return 0
    if version <= 26:
        return 1
    return 2


# The 45 characters of alphanumeric mode in table order (7.4.5, Table 5).
ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
ALPHANUMERIC_VALUES: Dict[int, int] = {
    ord(char): index for index, char in enumerate(ALPHANUMERIC_CHARSET)
}

PAD_CODEWORDS = (0xEC, 0x11)


# Error correction codewords per block, indexed [level ordinal][version]
# (7.5.1, Table 9). Index 0 is unused.
ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28,
     28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26,
     26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30,
     28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28,
     30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

# Number of error correction blocks, indexed [level ordinal][version]
# (7.5.1, Table 9). Index 0 is unused.
NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8,
     8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16,
     17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20,
     23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25,
     25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)

# Row/column coordinates of alignment pattern centers (Annex E, Table E.1).
ALIGNMENT_PATTERN_POSITIONS: Tuple[Tuple[int, ...], ...] = (
    (),                               # 1
    (6, 18),                          # 2
    (6, 22),                          # 3
    (6, 26),                          # 4
    (6, 30),                          # 5
    (6, 34),                          # 6
    (6, 22, 38),                      # 7
    (6, 24, 42),                      # 8
    (6, 26, 46),                      # 9
    (6, 28, 50),                      # 10
    (6, 30, 54),                      # 11
    (6, 32, 58),                      # 12
    (6, 34, 62),                      # 13
    (6, 26, 46, 66),                  # 14
    (6, 26, 48, 70),                  # 15
    (6, 26, 50, 74),                  # 16
    (6, 30, 54, 78),                  # 17
    (6, 30, 56, 82),                  # 18
    (6, 30, 58, 86),                  # 19
    (6, 34, 62, 90),                  # 20
    (6, 28, 50, 72, 94),              # 21
    (6, 26, 50, 74, 98),              # 22
    (6, 30, 54, 78, 102),             # 23
    (6, 28, 54, 80, 106),             # 24
    (6, 32, 58, 84, 110),             # 25
    (6, 30, 58, 86, 114),             # 26
    (6, 34, 62, 90, 118),             # 27
    (6, 26, 50, 74, 98, 122),         # 28
    (6, 30, 54, 78, 102, 126),        # 29
    (6, 26, 52, 78, 104, 130),        # 30
    (6, 30, 56, 82, 108, 134),        # 31
    (6, 34, 60, 86, 112, 138),        # 32
    (6, 30, 58, 86, 114, 142),        # 33
    (6, 34, 62, 90, 118, 146),        # 34
    (6, 30, 54, 78, 102, 126, 150),   # 35
    (6, 24, 50, 76, 102, 128, 154),   # 36
    (6, 28, 54, 80, 106, 132, 158),   # 37
    (6, 32, 58, 84, 110, 136, 162),   # 38
    (6, 26, 54, 82, 110, 138, 166),   # 39
    (6, 30, 58, 86, 114, 142, 170),   # 40
)


def alignment_pattern_positions(version: int) -> Tuple[int, ...]:
    return ALIGNMENT_PATTERN_POSITIONS[version - 1]


def symbol_size(version: int) -> int:
    return version * 4 + 17


def num_raw_data_modules(version: int) -> int:
    """Return the number of modules available for codewords, remainder bits included.

    This is the symbol area minus finders with separators and format areas,
    timing strips, alignment patterns and, from version 7 on, the version
    information blocks (7.1, Table 1 column "data modules").
    """
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def num_total_codewords(version: int) -> int:
    return num_raw_data_modules(version) // 8


def num_ecc_codewords(version: int, level: ErrorCorrectionLevel) -> int:
    return (
        ECC_CODEWORDS_PER_BLOCK[level.ordinal][version]
        * NUM_ERROR_CORRECTION_BLOCKS[level.ordinal][version]
    )


def num_data_codewords(version: int, level: ErrorCorrectionLevel) -> int:
    return num_total_codewords(version) - num_ecc_codewords(version, level)


def _bch_remainder(value: int, generator: int, degree: int) -> int:
    rem = value
    for _ in range(degree):
        rem = (rem << 1) ^ (generator if (rem >> (degree - 1)) & 1 else 0)
    return rem & ((1 << degree) - 1)


# BCH(15,5) format information, XOR-masked with 0x5412 (7.9.1, Annex C).
FORMAT_GENERATOR = 0x537
FORMAT_MASK = 0x5412


def _build_format_info() -> Dict[Tuple[ErrorCorrectionLevel, int], int]:
    table = {}
    for level in ErrorCorrectionLevel:
        for mask in range(8):
            data = (level.format_bits << 3) | mask
            bits = ((data << 10) | _bch_remainder(data, FORMAT_GENERATOR, 10)) ^ FORMAT_MASK
            table[(level, mask)] = bits
    return table


FORMAT_INFO = _build_format_info()

# BCH(18,6) version information for versions 7 to 40 (7.10, Annex D).
VERSION_GENERATOR = 0x1F25


def _build_version_info() -> Dict[int, int]:
    return {
        version: (version << 12) | _bch_remainder(version, VERSION_GENERATOR, 12)
        for version in range(7, MAX_VERSION + 1)
    }


VERSION_INFO = _build_version_info()
