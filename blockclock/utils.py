"""Number helpers shared by the display screen formatters."""

from __future__ import annotations

import math
import re

NUM_SCREENS = 7
"""Number of e-paper screens on the clock."""

_HALVING_INTERVAL = 210_000
_INITIAL_BLOCK_REWARD = 50
_FINAL_SUPPLY = 20999999.9769

_SUFFIXES = (
    (1_000_000_000_000_000, "Q", 15),
    (1_000_000_000_000, "T", 12),
    (1_000_000_000, "B", 9),
    (1_000_000, "M", 6),
    (1_000, "K", 3),
)

# The formatted text never grows beyond this many characters.
_RESULT_LIMIT = 19

_DIGITS = re.compile(r"[0-9]+")
_LETTER = re.compile(r"[A-Za-z]")

_MULTIPLIERS = {
    "m": (100_000, 1),  # milli-bitcoin
    "u": (100, 1),  # micro-bitcoin
    "n": (1, 10),  # nano-bitcoin
    "p": (1, 10_000),  # pico-bitcoin
}


def modulo(x: int, n: int) -> int:
    """Return x modulo n, never negative for a positive n."""
    return (x % n + n) % n


def get_supply_at_block(block_nr: int) -> float:
    """Return the number of bitcoin in circulation at the given block height."""
    if block_nr >= 33 * _HALVING_INTERVAL:
        return _FINAL_SUPPLY

    halving_count = block_nr // _HALVING_INTERVAL
    total = sum(
        _HALVING_INTERVAL * _INITIAL_BLOCK_REWARD * 0.5**era
        for era in range(halving_count)
    )
    total += (block_nr % _HALVING_INTERVAL) * _INITIAL_BLOCK_REWARD * 0.5**halving_count
    return float(total)


def format_number_with_suffix(num: int, num_characters: int = 4) -> str:
    """Shorten a number with a K/M/B/T/Q suffix, using spare characters for decimals."""
    if num < 0:
        raise ValueError("number must not be negative")

    num_digits = int(math.log10(num)) + 1 if num > 0 else 1

    for scale, suffix, digits in _SUFFIXES:
        if num >= scale or num_digits > digits:
            value = float(num) / scale
            break
    else:
        return str(num)[:_RESULT_LIMIT]

    text = f"{value:.0f}{suffix}"
    if len(text) < num_characters:
        text = f"{value:.{num_characters - len(text) - 1}f}{suffix}"
    return text[:_RESULT_LIMIT]


def get_amount_in_satoshis(bolt11: str) -> int:
    """Return the amount in satoshis encoded in a BOLT11 invoice's human-readable part."""
    digits = _DIGITS.search(bolt11)
    if digits is None:
        raise ValueError("invoice carries no amount")

    letter = _LETTER.search(bolt11, digits.end())
    if letter is None:
        raise ValueError("invoice amount has no multiplier")

    try:
        factor, divisor = _MULTIPLIERS[letter.group()]
    except KeyError:
        raise ValueError(f"unknown amount multiplier {letter.group()!r}") from None

    return int(digits.group()) * factor // divisor