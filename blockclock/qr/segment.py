"""QR Code data segments: character modes, bit packing and length accounting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Sequence

VERSION_MIN = 1
"""Smallest QR Code Model 2 version."""

VERSION_MAX = 40
"""Largest QR Code Model 2 version."""

MAX_BIT_LENGTH = 32767
"""Longest bit string a segment, or a whole symbol's data, may hold."""

ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"

_ALPHANUMERIC_INDEX = {char: index for index, char in enumerate(ALPHANUMERIC_CHARSET)}
_DIGITS = frozenset("0123456789")


class Mode(IntEnum):
    """How a segment's data bits are interpreted; the value is the mode indicator."""

    NUMERIC = 0x1
    ALPHANUMERIC = 0x2
    BYTE = 0x4
    KANJI = 0x8
    ECI = 0x7


_CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
    Mode.ECI: (0, 0, 0),
}


@dataclass(frozen=True)
class Segment:
    """A run of character, binary or control data, held as a string of bits."""

    mode: Mode
    num_chars: int
    bits: tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        bits = tuple(int(bit) for bit in self.bits)
        if any(bit not in (0, 1) for bit in bits):
            raise ValueError("segment bits must be 0 or 1")
        if not 0 <= self.num_chars <= MAX_BIT_LENGTH:
            raise ValueError("character count out of range")
        if len(bits) > MAX_BIT_LENGTH:
            raise ValueError("segment bit string too long")
        object.__setattr__(self, "bits", bits)

    @property
    def bit_length(self) -> int:
        """Number of data bits in the segment."""
        return len(self.bits)

    @property
    def data(self) -> bytes:
        """The data bits packed big-endian into bytes, zero-padded at the end."""
        padded = self.bits + (0,) * (-len(self.bits) % 8)
        return bytes(
            int("".join(map(str, padded[start : start + 8])), 2)
            for start in range(0, len(padded), 8)
        )


def _append_bits(bits: list[int], value: int, count: int) -> None:
    if not 0 <= count <= 16 or value < 0 or value >> count:
        raise ValueError("value does not fit in the given number of bits")
    bits.extend((value >> shift) & 1 for shift in reversed(range(count)))


def is_numeric(text: str) -> bool:
    """Tell whether the text can be encoded in numeric mode."""
    return all(char in _DIGITS for char in text)


def is_alphanumeric(text: str) -> bool:
    """Tell whether the text can be encoded in alphanumeric mode."""
    return all(char in _ALPHANUMERIC_INDEX for char in text)


def calc_segment_bit_length(mode: Mode, num_chars: int) -> int:
    """Return the number of data bits a segment of that many characters needs.

    For ECI mode the character count must be zero and the worst case is returned.
    Raises ValueError when the result would exceed the segment length limit.
    """
    mode = Mode(mode)
    if num_chars < 0:
        raise ValueError("character count must not be negative")
    if num_chars > MAX_BIT_LENGTH:
        raise ValueError("too many characters for a segment")

    if mode is Mode.NUMERIC:
        result = (num_chars * 10 + 2) // 3
    elif mode is Mode.ALPHANUMERIC:
        result = (num_chars * 11 + 1) // 2
    elif mode is Mode.BYTE:
        result = num_chars * 8
    elif mode is Mode.KANJI:
        result = num_chars * 13
    elif num_chars == 0:
        result = 3 * 8
    else:
        raise ValueError("an ECI segment has no characters")

    if result > MAX_BIT_LENGTH:
        raise ValueError("segment data too long")
    return result


def calc_segment_buffer_size(mode: Mode, num_chars: int) -> int:
    """Return the number of bytes needed to hold a segment's data bits."""
    return (calc_segment_bit_length(mode, num_chars) + 7) // 8


def num_char_count_bits(mode: Mode, version: int) -> int:
    """Return the width of the character count field for a mode at a version."""
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version must be in [{VERSION_MIN}, {VERSION_MAX}]")
    return _CHAR_COUNT_BITS[Mode(mode)][(version + 7) // 17]


def get_total_bits(segs: Iterable[Segment], version: int) -> int | None:
    """Return the bits needed to encode the segments at a version.

    Returns None when a segment's length does not fit its count field or the
    total exceeds the length limit.
    """
    total = 0
    for seg in segs:
        count_bits = num_char_count_bits(seg.mode, version)
        if seg.num_chars >= 1 << count_bits:
            return None
        total += 4 + count_bits + seg.bit_length
        if total > MAX_BIT_LENGTH:
            return None
    return total


def make_bytes(data: Sequence[int] | bytes) -> Segment:
    """Return a byte-mode segment holding the given bytes."""
    data = bytes(data)
    calc_segment_bit_length(Mode.BYTE, len(data))
    bits: list[int] = []
    for byte in data:
        _append_bits(bits, byte, 8)
    return Segment(Mode.BYTE, len(data), tuple(bits))


def make_numeric(digits: str) -> Segment:
    """Return a numeric-mode segment for a string of decimal digits."""
    if not is_numeric(digits):
        raise ValueError("numeric mode takes only the digits 0 to 9")
    expected = calc_segment_bit_length(Mode.NUMERIC, len(digits))
    bits: list[int] = []
    for start in range(0, len(digits), 3):
        chunk = digits[start : start + 3]
        _append_bits(bits, int(chunk), len(chunk) * 3 + 1)
    assert len(bits) == expected
    return Segment(Mode.NUMERIC, len(digits), tuple(bits))


def make_alphanumeric(text: str) -> Segment:
    """Return an alphanumeric-mode segment for the given text."""
    if not is_alphanumeric(text):
        raise ValueError("text holds characters outside the alphanumeric set")
    expected = calc_segment_bit_length(Mode.ALPHANUMERIC, len(text))
    bits: list[int] = []
    for start in range(0, len(text), 2):
        pair = text[start : start + 2]
        if len(pair) == 2:
            value = _ALPHANUMERIC_INDEX[pair[0]] * 45 + _ALPHANUMERIC_INDEX[pair[1]]
            _append_bits(bits, value, 11)
        else:
            _append_bits(bits, _ALPHANUMERIC_INDEX[pair], 6)
    assert len(bits) == expected
    return Segment(Mode.ALPHANUMERIC, len(text), tuple(bits))


def make_eci(assign_val: int) -> Segment:
    """Return an Extended Channel Interpretation designator segment."""
    bits: list[int] = []
    if assign_val < 0:
        raise ValueError("ECI assignment value must not be negative")
    if assign_val < 1 << 7:
        _append_bits(bits, assign_val, 8)
    elif assign_val < 1 << 14:
        _append_bits(bits, 2, 2)
        _append_bits(bits, assign_val, 14)
    elif assign_val < 1_000_000:
        _append_bits(bits, 6, 3)
        _append_bits(bits, assign_val >> 10, 11)
        _append_bits(bits, assign_val & 0x3FF, 10)
    else:
        raise ValueError("ECI assignment value out of range")
    return Segment(Mode.ECI, 0, tuple(bits))