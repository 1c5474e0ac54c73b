"""Error correction for QR Codes: capacity tables and Reed-Solomon codewords."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from blockclock.qr.segment import VERSION_MAX, VERSION_MIN


class Ecc(IntEnum):
    """Error correction level, in ascending order of protection."""

    LOW = 0  # tolerates about 7% erroneous codewords
    MEDIUM = 1  # about 15%
    QUARTILE = 2  # about 25%
    HIGH = 3  # about 30%


# Indexed by [ecl][version]; index 0 is padding and never used.
ECC_CODEWORDS_PER_BLOCK = (
    (-1, 7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),
)

NUM_ERROR_CORRECTION_BLOCKS = (
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8, 8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),
)

REED_SOLOMON_DEGREE_MAX = 30
"""Largest error correction block length in the tables above."""

_FIELD_POLY = 0x11D


def _check_version(version: int) -> None:
    if not VERSION_MIN <= version <= VERSION_MAX:
        raise ValueError(f"version must be in [{VERSION_MIN}, {VERSION_MAX}]")


def _check_degree(degree: int) -> None:
    if not 1 <= degree <= REED_SOLOMON_DEGREE_MAX:
        raise ValueError(f"degree must be in [1, {REED_SOLOMON_DEGREE_MAX}]")


def get_num_raw_data_modules(version: int) -> int:
    """Return the data bits a version holds once function modules are excluded.

    Remainder bits are included, so the result need not be a multiple of 8.
    """
    _check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def get_num_data_codewords(version: int, ecl: Ecc) -> int:
    """Return the number of 8-bit data codewords (excluding ECC) for a version and level."""
    _check_version(version)
    ecl = Ecc(ecl)
    return (
        get_num_raw_data_modules(version) // 8
        - ECC_CODEWORDS_PER_BLOCK[ecl][version] * NUM_ERROR_CORRECTION_BLOCKS[ecl][version]
    )


def reed_solomon_multiply(x: int, y: int) -> int:
    """Return the product of two elements of GF(2^8/0x11D)."""
    if not (0 <= x <= 0xFF and 0 <= y <= 0xFF):
        raise ValueError("field elements must be in [0, 255]")
    z = 0
    for shift in reversed(range(8)):
        z = ((z << 1) ^ ((z >> 7) * _FIELD_POLY)) & 0xFF
        z ^= ((y >> shift) & 1) * x
    return z


def reed_solomon_compute_divisor(degree: int) -> list[int]:
    """Return the generator polynomial of the given degree, highest power first.

    The leading coefficient, always 1, is left out.
    """
    _check_degree(degree)
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        for j in range(degree):
            result[j] = reed_solomon_multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = reed_solomon_multiply(root, 0x02)
    return result


def reed_solomon_compute_remainder(data: Sequence[int], divisor: Sequence[int]) -> list[int]:
    """Return the error correction codewords for the data and generator polynomial."""
    degree = len(divisor)
    _check_degree(degree)
    result = [0] * degree
    for byte in data:
        factor = byte ^ result[0]
        result = result[1:] + [0]
        for index, coef in enumerate(divisor):
            result[index] ^= reed_solomon_multiply(coef, factor)
    return result


def add_ecc_and_interleave(data: Sequence[int], version: int, ecl: Ecc) -> bytes:
    """Split data into blocks, append each block's ECC and interleave the result."""
    _check_version(version)
    ecl = Ecc(ecl)
    data = bytes(data)
    data_len = get_num_data_codewords(version, ecl)
    if len(data) != data_len:
        raise ValueError(f"expected {data_len} data codewords, got {len(data)}")

    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecl][version]
    block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecl][version]
    raw_codewords = get_num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks - block_ecc_len

    divisor = reed_solomon_compute_divisor(block_ecc_len)
    data_blocks: list[bytes] = []
    ecc_blocks: list[list[int]] = []
    offset = 0
    for block in range(num_blocks):
        length = short_block_len + (0 if block < num_short_blocks else 1)
        chunk = data[offset : offset + length]
        offset += length
        data_blocks.append(chunk)
        ecc_blocks.append(reed_solomon_compute_remainder(chunk, divisor))

    result = bytearray()
    for position in range(short_block_len + 1):
        result.extend(blk[position] for blk in data_blocks if position < len(blk))
    for position in range(block_ecc_len):
        result.extend(ecc[position] for ecc in ecc_blocks)
    return bytes(result)