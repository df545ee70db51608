"""Function pattern layout and codeword placement (7.3, 7.7)."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from . import tables
from .tables import ErrorCorrectionLevel

Coordinate = Tuple[int, int]
Grid = List[List[bool]]


class ModuleRole(Enum):
    UNSET = 0
    RESERVED = 1
    DATA = 2


class ZigzagCursor:
    """Iterates the writable cells in codeword placement order (7.7.3).

    Starts at the bottom-right corner and walks two-column strips, upwards
    then downwards, right cell before left cell. Column 6 (vertical timing)
    is skipped entirely; reserved cells are skipped individually.
    """

    def __init__(self, roles: Sequence[Sequence[ModuleRole]]):
        self._roles = roles
        self._size = len(roles)
        self._right = self._size - 1
        self._vert = 0
        self._offset = 0

    def __iter__(self) -> Iterator[Coordinate]:
        return self

    @property
    def upward(self) -> bool:
        return (self._right + 1) & 2 == 0

    def _advance(self) -> None:
        self._offset += 1
        if self._offset < 2:
            return
        self._offset = 0
        self._vert += 1
        if self._vert < self._size:
            return
        self._vert = 0
        self._right -= 2
        if self._right == 6:
            self._right = 5

    def __next__(self) -> Coordinate:
        while self._right >= 1:
            col = self._right - self._offset
            row = self._size - 1 - self._vert if self.upward else self._vert
            self._advance()
            if self._roles[row][col] is not ModuleRole.RESERVED:
                return row, col
        raise StopIteration


def format_info_coordinates(size: int) -> Tuple[List[Coordinate], List[Coordinate]]:
    """Return both copies of the format area as (row, col) lists indexed by bit (7.9.1)."""
    first = [(i, 8) for i in range(6)]
    first += [(7, 8), (8, 8), (8, 7)]
    first += [(8, 14 - i) for i in range(9, 15)]
    second = [(8, size - 1 - i) for i in range(8)]
    second += [(size - 15 + i, 8) for i in range(8, 15)]
    return first, second


class MatrixBuilder:
    """Owns one symbol's module grid from empty layout to committed mask."""

    def __init__(self, version: int):
        if not tables.MIN_VERSION <= version <= tables.MAX_VERSION:
            raise ValueError("Version number out of range")
        self.version = version
        self.size = tables.symbol_size(version)
        self.modules: Grid = [[False] * self.size for _ in range(self.size)]
        self.roles = [[ModuleRole.UNSET] * self.size for _ in range(self.size)]
        self.mask: Optional[int] = None
        self._draw_function_patterns()

    def _set_function(self, row: int, col: int, dark: bool) -> None:
        self.modules[row][col] = dark
        self.roles[row][col] = ModuleRole.RESERVED

    def _draw_function_patterns(self) -> None:
        size = self.size
        for i in range(size):
            self._set_function(6, i, i % 2 == 0)
            self._set_function(i, 6, i % 2 == 0)

        # Finders overwrite the ends of the timing strips.
        self._draw_finder_pattern(3, 3)
        self._draw_finder_pattern(3, size - 4)
        self._draw_finder_pattern(size - 4, 3)

        positions = tables.alignment_pattern_positions(self.version)
        last = len(positions) - 1
        for i, row in enumerate(positions):
            for j, col in enumerate(positions):
                if (i, j) in ((0, 0), (0, last), (last, 0)):
                    continue
                self._draw_alignment_pattern(row, col)

        first, second = format_info_coordinates(size)
        for row, col in first + second:
            self._set_function(row, col, False)
        self._set_function(size - 8, 8, True)

        self._draw_version_info()

    def _draw_finder_pattern(self, center_row: int, center_col: int) -> None:
        """Draw a 7x7 finder and its light separator, clipped to the symbol."""
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                row = center_row + dy
                col = center_col + dx
                if 0 <= row < self.size and 0 <= col < self.size:
                    self._set_function(row, col, max(abs(dx), abs(dy)) not in (2, 4))

    def _draw_alignment_pattern(self, center_row: int, center_col: int) -> None:
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                self._set_function(
                    center_row + dy, center_col + dx, max(abs(dx), abs(dy)) != 1
                )

    def _draw_version_info(self) -> None:
        if self.version < 7:
            return
        bits = tables.VERSION_INFO[self.version]
        for i in range(18):
            dark = (bits >> i) & 1 == 1
            a = self.size - 11 + i % 3
            b = i // 3
            self._set_function(b, a, dark)
            self._set_function(a, b, dark)

    def place_codewords(self, codewords: Sequence[int]) -> None:
        """Write codewords MSB first along the zig-zag scan; leftover cells stay light."""
        assert len(codewords) == tables.num_total_codewords(self.version)
        bit_count = len(codewords) * 8
        i = 0
        for row, col in ZigzagCursor(self.roles):
            assert self.roles[row][col] is ModuleRole.UNSET, (row, col)
            if i < bit_count:
                self.modules[row][col] = (codewords[i >> 3] >> (7 - (i & 7))) & 1 == 1
                i += 1
            self.roles[row][col] = ModuleRole.DATA
        assert i == bit_count, "codeword stream longer than the data region"
        assert all(role is not ModuleRole.UNSET for line in self.roles for role in line)

    def candidate(
        self,
        level: ErrorCorrectionLevel,
        mask: int,
        mask_function: Callable[[int, int], bool],
    ) -> Grid:
        """Return a masked copy with format bits for (level, mask); self is unchanged."""
        grid = [line[:] for line in self.modules]
        for row in range(self.size):
            roles = self.roles[row]
            line = grid[row]
            for col in range(self.size):
                if roles[col] is ModuleRole.DATA and mask_function(row, col):
                    line[col] = not line[col]
        self._write_format_bits(grid, level, mask)
        return grid

    def commit(
        self,
        level: ErrorCorrectionLevel,
        mask: int,
        mask_function: Callable[[int, int], bool],
    ) -> None:
        assert self.mask is None, "mask already committed"
        self.modules = self.candidate(level, mask, mask_function)
        self.mask = mask

    def _write_format_bits(self, grid: Grid, level: ErrorCorrectionLevel, mask: int) -> None:
        bits = tables.FORMAT_INFO[(level, mask)]
        for copy in format_info_coordinates(self.size):
            for i, (row, col) in enumerate(copy):
                assert self.roles[row][col] is ModuleRole.RESERVED
                grid[row][col] = (bits >> i) & 1 == 1

    def get_matrix(self) -> Grid:
        return [line[:] for line in self.modules]
