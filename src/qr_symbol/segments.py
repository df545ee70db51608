"""Mode segmentation and bitstream packing (7.4)."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from . import tables
from .errors import UnsupportedCharacter
from .tables import ErrorCorrectionLevel

_DIGITS = frozenset(range(ord("0"), ord("9") + 1))


@dataclass(frozen=True)
class Mode:
    name: str
    indicator: int
    # Bits per character multiplied by 6, so 10/3 and 11/2 stay integral.
    unit_cost: int

    def char_count_bits(self, version: int) -> int:
        return tables.CHAR_COUNT_BITS[self.indicator][tables.version_tier(version)]

    def can_encode(self, byte: int) -> bool:
        if self.indicator == tables.MODE_NUMERIC:
            return byte in _DIGITS
        if self.indicator == tables.MODE_ALPHANUMERIC:
            return byte in tables.ALPHANUMERIC_VALUES
        return True


NUMERIC = Mode("numeric", tables.MODE_NUMERIC, 20)
ALPHANUMERIC = Mode("alphanumeric", tables.MODE_ALPHANUMERIC, 33)
BYTE = Mode("byte", tables.MODE_BYTE, 48)

# Narrower modes first so that cost ties resolve towards them.
MODES = (NUMERIC, ALPHANUMERIC, BYTE)


@dataclass(frozen=True)
class Segment:
    mode: Mode
    char_count: int
    bits: Tuple[int, ...]

    def bit_length(self, version: int) -> Optional[int]:
        """Return the encoded size with header, or None if the count field overflows."""
        count_bits = self.mode.char_count_bits(version)
        if self.char_count >= 1 << count_bits:
            return None
        return 4 + count_bits + len(self.bits)


class BitBuffer:
    def __init__(self) -> None:
        self.bits: List[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def append_bits(self, value: int, length: int) -> None:
        if length < 0 or value >> length != 0:
            raise ValueError("Value out of range")
        for i in reversed(range(length)):
            self.bits.append((value >> i) & 1)

    def extend(self, bits: Sequence[int]) -> None:
        self.bits.extend(bits)

    def append_terminator(self, capacity_bits: int) -> None:
        terminator = min(4, capacity_bits - len(self.bits))
        self.bits.extend([0] * terminator)
        extra = -len(self.bits) % 8
        self.bits.extend([0] * extra)

    def to_codewords(self) -> List[int]:
        codewords = []
        for i in range(0, len(self.bits), 8):
            chunk = 0
            for bit in self.bits[i:i + 8]:
                chunk = (chunk << 1) | bit
            codewords.append(chunk)
        return codewords

    @staticmethod
    def pad_codewords(count: int) -> List[int]:
        return list(itertools.islice(itertools.cycle(tables.PAD_CODEWORDS), count))


def make_numeric(digits: bytes) -> Segment:
    """Pack ASCII digits three at a time into 10 bits (7 bits for two, 4 for one)."""
    if any(b not in _DIGITS for b in digits):
        raise UnsupportedCharacter("numeric mode accepts only the digits 0-9")
    bb = BitBuffer()
    for i in range(0, len(digits), 3):
        chunk = digits[i:i + 3]
        bb.append_bits(int(chunk.decode("ascii")), len(chunk) * 3 + 1)
    return Segment(NUMERIC, len(digits), tuple(bb.bits))


def make_alphanumeric(text: bytes) -> Segment:
    """Pack pairs of characters as 45 * first + second in 11 bits (6 bits for a single)."""
    try:
        values = [tables.ALPHANUMERIC_VALUES[b] for b in text]
    except KeyError as exc:
        raise UnsupportedCharacter(
            f"character {chr(exc.args[0])!r} is not in the alphanumeric set"
        ) from exc
    bb = BitBuffer()
    for i in range(0, len(values) - 1, 2):
        bb.append_bits(values[i] * 45 + values[i + 1], 11)
    if len(values) % 2:
        bb.append_bits(values[-1], 6)
    return Segment(ALPHANUMERIC, len(values), tuple(bb.bits))


def make_bytes(data: bytes) -> Segment:
    if isinstance(data, str):
        raise UnsupportedCharacter("byte mode expects bytes, not str")
    bb = BitBuffer()
    for b in data:
        bb.append_bits(b, 8)
    return Segment(BYTE, len(data), tuple(bb.bits))


_PACKERS = {
    NUMERIC: make_numeric,
    ALPHANUMERIC: make_alphanumeric,
    BYTE: make_bytes,
}


def _choose_modes(data: bytes, version: int) -> List[Mode]:
    """Return the cheapest mode for every byte of ``data`` at ``version``.

    ``costs[j]`` is the cheapest size (in sixths of a bit) of the prefix read so
    far, given that the next byte continues in ``MODES[j]``; switching into a
    mode pays its header and rounds the previous segment up to whole bits.
    """
    head_costs = [(4 + mode.char_count_bits(version)) * 6 for mode in MODES]
    costs = list(head_costs)
    choices: List[List[Optional[Mode]]] = []
    for byte in data:
        encoded: List[Optional[Mode]] = [None] * len(MODES)
        cur_costs = [0] * len(MODES)
        for j, mode in enumerate(MODES):
            if mode.can_encode(byte):
                cur_costs[j] = costs[j] + mode.unit_cost
                encoded[j] = mode
        stay_costs = list(cur_costs)
        step = list(encoded)
        for j in range(len(MODES)):
            for k in range(len(MODES)):
                if encoded[k] is None or k == j:
                    continue
                switch_cost = (stay_costs[k] + 5) // 6 * 6 + head_costs[j]
                if step[j] is None or switch_cost < cur_costs[j]:
                    cur_costs[j] = switch_cost
                    step[j] = encoded[k]
        choices.append(step)
        costs = cur_costs

    if not choices:
        return []
    state = min(range(len(MODES)), key=lambda j: (costs[j], j))
    result: List[Mode] = [BYTE] * len(data)
    for i in reversed(range(len(data))):
        mode = choices[i][state]
        assert mode is not None
        result[i] = mode
        state = MODES.index(mode)
    return result


def make_segments(data: bytes, version: int) -> List[Segment]:
    """Split ``data`` into the most compact segment list for ``version``'s tier."""
    modes = _choose_modes(data, version)
    segments = []
    start = 0
    for mode, group in itertools.groupby(modes):
        length = len(list(group))
        segments.append(_PACKERS[mode](data[start:start + length]))
        start += length
    assert start == len(data)
    return segments


def total_bits(segments: Sequence[Segment], version: int) -> Optional[int]:
    """Return the bitstream length before terminator, or None if a count overflows."""
    result = 0
    for segment in segments:
        length = segment.bit_length(version)
        if length is None:
            return None
        result += length
    return result


def build_codewords(
    segments: Sequence[Segment], version: int, level: ErrorCorrectionLevel
) -> List[int]:
    """Return exactly the data codewords for (version, level), padding included."""
    capacity_bits = tables.num_data_codewords(version, level) * 8
    bb = BitBuffer()
    for segment in segments:
        bb.append_bits(segment.mode.indicator, 4)
        bb.append_bits(segment.char_count, segment.mode.char_count_bits(version))
        bb.extend(segment.bits)
    assert len(bb) <= capacity_bits, "segments exceed the planned capacity"
    bb.append_terminator(capacity_bits)
    codewords = bb.to_codewords()
    codewords.extend(bb.pad_codewords(capacity_bits // 8 - len(codewords)))
    assert len(codewords) * 8 == capacity_bits
    return codewords
