from __future__ import annotations

import pytest

from qr_symbol import segments
from qr_symbol.errors import UnsupportedCharacter
from qr_symbol.segments import ALPHANUMERIC, BYTE, NUMERIC
from qr_symbol.tables import ErrorCorrectionLevel


def _bits(segment: segments.Segment) -> str:
    return "".join(str(bit) for bit in segment.bits)


def test_numeric_packs_three_digits_into_ten_bits() -> None:
    segment = segments.make_numeric(b"01234567")
    assert segment.mode is NUMERIC
    assert segment.char_count == 8
    assert _bits(segment) == "0000001100" + "0101011001" + "1000011"


@pytest.mark.parametrize(
    ("digits", "length"),
    [(b"1", 4), (b"12", 7), (b"123", 10), (b"1234", 14), (b"12345", 17)],
)
def test_numeric_leftover_digit_widths(digits: bytes, length: int) -> None:
    assert len(segments.make_numeric(digits).bits) == length


def test_alphanumeric_packs_pairs_into_eleven_bits() -> None:
    segment = segments.make_alphanumeric(b"HELLO WORLD")
    assert segment.char_count == 11
    assert _bits(segment) == (
        "01100001011" "01111000110" "10001011100" "10110111000" "10011010100" "001101"
    )


def test_byte_mode_copies_bytes() -> None:
    segment = segments.make_bytes(b"\x00\xff")
    assert _bits(segment) == "00000000" "11111111"


def test_packers_reject_characters_outside_their_set() -> None:
    with pytest.raises(UnsupportedCharacter):
        segments.make_numeric(b"12a")
    with pytest.raises(UnsupportedCharacter):
        segments.make_alphanumeric(b"hello")


@pytest.mark.parametrize(
    ("data", "mode"),
    [(b"01234567", NUMERIC), (b"HELLO WORLD", ALPHANUMERIC), (b"hello world", BYTE)],
)
def test_single_class_payload_gives_one_segment(data: bytes, mode: segments.Mode) -> None:
    result = segments.make_segments(data, 1)
    assert [s.mode for s in result] == [mode]
    assert result[0].char_count == len(data)


@pytest.mark.parametrize("length", range(1, 31))
def test_digit_only_payloads_use_numeric_mode(length: int) -> None:
    data = ("9876543210" * 3)[:length].encode()
    for version in (1, 10, 27):
        assert [s.mode for s in segments.make_segments(data, version)] == [NUMERIC]


def test_mixed_payload_switches_to_numeric_for_long_digit_run() -> None:
    data = b"GIFT CODE 123456789012345678901234"
    result = segments.make_segments(data, 1)
    assert [s.mode for s in result] == [ALPHANUMERIC, NUMERIC]
    assert [s.char_count for s in result] == [10, 24]


def test_segments_partition_the_payload() -> None:
    data = "Gift card #0042-7781 für Anna: 1234567890123".encode("utf-8")
    result = segments.make_segments(data, 5)
    assert sum(s.char_count for s in result) == len(data)
    assert BYTE in [s.mode for s in result]
    assert NUMERIC in [s.mode for s in result]


def test_short_digit_run_inside_text_stays_in_byte_mode() -> None:
    result = segments.make_segments(b"room 12b", 1)
    assert [s.mode for s in result] == [BYTE]


def test_empty_payload_has_no_segments() -> None:
    assert segments.make_segments(b"", 1) == []


def test_total_bits_includes_headers() -> None:
    result = segments.make_segments(b"01234567", 1)
    assert segments.total_bits(result, 1) == 41
    # 12-bit count field from version 10 on
    assert segments.total_bits(segments.make_segments(b"01234567", 10), 10) == 43


def test_total_bits_reports_count_overflow() -> None:
    segment = segments.make_bytes(b"a" * 256)
    assert segments.total_bits([segment], 9) is None
    assert segments.total_bits([segment], 10) == 4 + 16 + 256 * 8


def test_build_codewords_terminator_and_padding() -> None:
    result = segments.make_segments(b"01234567", 1)
    codewords = segments.build_codewords(result, 1, ErrorCorrectionLevel.M)
    assert codewords == [
        0x10, 0x20, 0x0C, 0x56, 0x61, 0x80,
        0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11, 0xEC, 0x11,
    ]


def test_build_codewords_for_empty_payload() -> None:
    codewords = segments.build_codewords([], 1, ErrorCorrectionLevel.L)
    assert len(codewords) == 19
    assert codewords[:3] == [0x00, 0xEC, 0x11]


def test_build_codewords_truncates_terminator_at_capacity() -> None:
    # 17 bytes fill version 1-L (19 codewords) up to the last 4 bits.
    result = [segments.make_bytes(b"x" * 17)]
    codewords = segments.build_codewords(result, 1, ErrorCorrectionLevel.L)
    assert len(codewords) == 19
    assert codewords[-1] & 0x0F == 0


def test_bit_buffer_rejects_oversized_values() -> None:
    bb = segments.BitBuffer()
    with pytest.raises(ValueError):
        bb.append_bits(16, 4)
