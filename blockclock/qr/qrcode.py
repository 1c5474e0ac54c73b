"""QR Code symbols: choosing a version, drawing the modules and picking a mask."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Sequence

from blockclock.qr.ecc import Ecc, add_ecc_and_interleave, get_num_data_codewords, get_num_raw_data_modules
from blockclock.qr.segment import (
    VERSION_MAX,
    VERSION_MIN,
    Segment,
    get_total_bits,
    is_alphanumeric,
    is_numeric,
    make_alphanumeric,
    make_bytes,
    make_numeric,
    num_char_count_bits,
)

_PENALTY_N1 = 3
_PENALTY_N2 = 3
_PENALTY_N3 = 40
_PENALTY_N4 = 10

# Format-bit value of each error correction level, indexed by Ecc.
_ECC_FORMAT_BITS = (1, 0, 3, 2)


class Mask(IntEnum):
    """Mask pattern of a symbol; AUTO lets the encoder choose the best one."""

    AUTO = -1
    MASK_0 = 0
    MASK_1 = 1
    MASK_2 = 2
    MASK_3 = 3
    MASK_4 = 4
    MASK_5 = 5
    MASK_6 = 6
    MASK_7 = 7


_MASK_PATTERNS: tuple[Callable[[int, int], bool], ...] = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


class DataTooLongError(ValueError):
    """Raised when the data does not fit in any version of the allowed range."""


@dataclass(frozen=True)
class QrCode:
    """An immutable square grid of dark (True) and light (False) modules."""

    version: int
    ecl: Ecc
    mask: Mask
    modules: tuple[tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        """Side length of the symbol, in modules."""
        return len(self.modules)

    def get_module(self, x: int, y: int) -> bool:
        """Return the module at (x, y); coordinates out of bounds read as light."""
        return 0 <= x < self.size and 0 <= y < self.size and self.modules[y][x]


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version must be in [{VERSION_MIN}, {VERSION_MAX}]")


def get_alignment_pattern_positions(version: int) -> list[int]:
    """Return the ascending centre coordinates of the alignment patterns of a version."""
    _check_version(version)
    if version == 1:
        return []
    num_align = version // 7 + 2
    if version == 32:
        step = 26
    else:
        step = (version * 4 + num_align * 2 + 1) // (num_align * 2 - 2) * 2
    last = version * 4 + 10
    return [6] + [last - step * index for index in reversed(range(num_align - 1))]


def _get_bit(value: int, index: int) -> bool:
    return (value >> index) & 1 != 0


class _Canvas:
    """Mutable grid used while a symbol is being drawn."""

    def __init__(self, version: int) -> None:
        self.version = version
        self.size = version * 4 + 17
        self.modules = [[False] * self.size for _ in range(self.size)]
        self.is_function = [[False] * self.size for _ in range(self.size)]

    def set_function(self, x: int, y: int, dark: bool) -> None:
        self.modules[y][x] = dark
        self.is_function[y][x] = True

    def draw_function_patterns(self) -> None:
        for i in range(self.size):
            self.set_function(6, i, i % 2 == 0)
            self.set_function(i, 6, i % 2 == 0)

        for cx, cy in ((3, 3), (self.size - 4, 3), (3, self.size - 4)):
            self._draw_finder(cx, cy)

        positions = get_alignment_pattern_positions(self.version)
        last = len(positions) - 1
        corners = {(0, 0), (0, last), (last, 0)}
        for i, px in enumerate(positions):
            for j, py in enumerate(positions):
                if (i, j) not in corners:
                    self._draw_alignment(px, py)

        self.draw_format_bits(Ecc.LOW, 0)
        self._draw_version()

    def _draw_finder(self, cx: int, cy: int) -> None:
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                x, y = cx + dx, cy + dy
                if 0 <= x < self.size and 0 <= y < self.size:
                    self.set_function(x, y, max(abs(dx), abs(dy)) not in (2, 4))

    def _draw_alignment(self, cx: int, cy: int) -> None:
        for dy in range(-2, 3):
            for dx in range(-2, 3):
                self.set_function(cx + dx, cy + dy, max(abs(dx), abs(dy)) != 1)

    def draw_format_bits(self, ecl: Ecc, mask: int) -> None:
        data = _ECC_FORMAT_BITS[ecl] << 3 | mask
        rem = data
        for _ in range(10):
            rem = (rem << 1) ^ ((rem >> 9) * 0x537)
        bits = (data << 10 | rem) ^ 0x5412

        for i in range(6):
            self.set_function(8, i, _get_bit(bits, i))
        self.set_function(8, 7, _get_bit(bits, 6))
        self.set_function(8, 8, _get_bit(bits, 7))
        self.set_function(7, 8, _get_bit(bits, 8))
        for i in range(9, 15):
            self.set_function(14 - i, 8, _get_bit(bits, i))

        for i in range(8):
            self.set_function(self.size - 1 - i, 8, _get_bit(bits, i))
        for i in range(8, 15):
            self.set_function(8, self.size - 15 + i, _get_bit(bits, i))
        self.set_function(8, self.size - 8, True)

    def _draw_version(self) -> None:
        if self.version < 7:
            return
        rem = self.version
        for _ in range(12):
            rem = (rem << 1) ^ ((rem >> 11) * 0x1F25)
        bits = self.version << 12 | rem
        for i in range(18):
            dark = _get_bit(bits, i)
            a, b = self.size - 11 + i % 3, i // 3
            self.set_function(a, b, dark)
            self.set_function(b, a, dark)

    def draw_codewords(self, data: bytes) -> None:
        total_bits = len(data) * 8
        index = 0
        for right in range(self.size - 1, 0, -2):
            if right <= 6:
                right -= 1
            upward = (right + 1) & 2 == 0
            for vert in range(self.size):
                y = self.size - 1 - vert if upward else vert
                for x in (right, right - 1):
                    if not self.is_function[y][x] and index < total_bits:
                        self.modules[y][x] = _get_bit(data[index >> 3], 7 - (index & 7))
                        index += 1
        assert index == total_bits

    def apply_mask(self, mask: int) -> None:
        pattern = _MASK_PATTERNS[mask]
        for y, (row, functions) in enumerate(zip(self.modules, self.is_function)):
            for x, is_function in enumerate(functions):
                if not is_function and pattern(x, y):
                    row[x] = not row[x]

    def penalty_score(self) -> int:
        size = self.size
        result = 0
        for line in (*self.modules, *zip(*self.modules)):
            result += _line_penalty(line, size)

        for row, below in zip(self.modules, self.modules[1:]):
            for x in range(size - 1):
                color = row[x]
                if color == row[x + 1] == below[x] == below[x + 1]:
                    result += _PENALTY_N2

        dark = sum(sum(row) for row in self.modules)
        total = size * size
        k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
        result += k * _PENALTY_N4
        return result


def _add_history(run_length: int, history: list[int], size: int) -> None:
    if history[0] == 0:
        run_length += size
    history.insert(0, run_length)
    history.pop()


def _count_patterns(history: list[int], size: int) -> int:
    n = history[1]
    core = (
        n > 0
        and history[2] == n
        and history[3] == n * 3
        and history[4] == n
        and history[5] == n
    )
    return int(core and history[0] >= n * 4 and history[6] >= n) + int(
        core and history[6] >= n * 4 and history[0] >= n
    )


def _line_penalty(line: Sequence[bool], size: int) -> int:
    result = 0
    run_color = False
    run_length = 0
    history = [0] * 7
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                result += _PENALTY_N1
            elif run_length > 5:
                result += 1
        else:
            _add_history(run_length, history, size)
            if not run_color:
                result += _count_patterns(history, size) * _PENALTY_N3
            run_color = color
            run_length = 1
    if run_color:
        _add_history(run_length, history, size)
        run_length = 0
    _add_history(run_length + size, history, size)
    result += _count_patterns(history, size) * _PENALTY_N3
    return result


def _data_codewords(segs: Sequence[Segment], version: int, ecl: Ecc) -> bytes:
    bits: list[int] = []

    def append(value: int, count: int) -> None:
        bits.extend((value >> shift) & 1 for shift in reversed(range(count)))

    for seg in segs:
        append(int(seg.mode), 4)
        append(seg.num_chars, num_char_count_bits(seg.mode, version))
        bits.extend(seg.bits)

    capacity = get_num_data_codewords(version, ecl) * 8
    append(0, min(4, capacity - len(bits)))
    append(0, -len(bits) % 8)

    pad = 0xEC
    while len(bits) < capacity:
        append(pad, 8)
        pad ^= 0xEC ^ 0x11

    return bytes(
        int("".join(map(str, bits[start : start + 8])), 2)
        for start in range(0, len(bits), 8)
    )


def encode_segments_advanced(
    segs: Iterable[Segment],
    ecl: Ecc,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode segments into the smallest symbol within the version range.

    With boost_ecl the error correction level is raised as far as the data
    still fits the chosen version. Raises DataTooLongError if nothing fits.
    """
    segs = list(segs)
    _check_version(min_version)
    _check_version(max_version)
    if min_version > max_version:
        raise ValueError("min_version must not exceed max_version")
    ecl = Ecc(ecl)
    mask = Mask(mask)

    for version in range(min_version, max_version + 1):
        used_bits = get_total_bits(segs, version)
        if used_bits is not None and used_bits <= get_num_data_codewords(version, ecl) * 8:
            break
    else:
        raise DataTooLongError("data too long for the allowed version range")

    if boost_ecl:
        for level in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
            if used_bits <= get_num_data_codewords(version, level) * 8:
                ecl = level

    codewords = add_ecc_and_interleave(_data_codewords(segs, version, ecl), version, ecl)
    assert len(codewords) == get_num_raw_data_modules(version) // 8

    canvas = _Canvas(version)
    canvas.draw_function_patterns()
    canvas.draw_codewords(codewords)

    if mask is Mask.AUTO:
        best_penalty = None
        for candidate in range(8):
            canvas.apply_mask(candidate)
            canvas.draw_format_bits(ecl, candidate)
            penalty = canvas.penalty_score()
            if best_penalty is None or penalty < best_penalty:
                mask = Mask(candidate)
                best_penalty = penalty
            canvas.apply_mask(candidate)

    canvas.apply_mask(mask)
    canvas.draw_format_bits(ecl, mask)
    return QrCode(
        version=version,
        ecl=ecl,
        mask=mask,
        modules=tuple(tuple(row) for row in canvas.modules),
    )


def encode_segments(segs: Iterable[Segment], ecl: Ecc) -> QrCode:
    """Encode segments using any version, automatic masking and ECC boosting."""
    return encode_segments_advanced(segs, ecl, VERSION_MIN, VERSION_MAX, Mask.AUTO, True)


def encode_text(
    text: str,
    ecl: Ecc,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode text in numeric, alphanumeric or UTF-8 byte mode, whichever applies."""
    if not text:
        return encode_segments_advanced([], ecl, min_version, max_version, mask, boost_ecl)
    try:
        if is_numeric(text):
            seg = make_numeric(text)
        elif is_alphanumeric(text):
            seg = make_alphanumeric(text)
        else:
            seg = make_bytes(text.encode("utf-8"))
    except ValueError as exc:
        raise DataTooLongError("text too long for a QR Code") from exc
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)


def encode_binary(
    data: bytes | Sequence[int],
    ecl: Ecc,
    min_version: int = VERSION_MIN,
    max_version: int = VERSION_MAX,
    mask: Mask = Mask.AUTO,
    boost_ecl: bool = True,
) -> QrCode:
    """Encode binary data in byte mode."""
    try:
        seg = make_bytes(data)
    except ValueError as exc:
        raise DataTooLongError("data too long for a QR Code") from exc
    return encode_segments_advanced([seg], ecl, min_version, max_version, mask, boost_ecl)