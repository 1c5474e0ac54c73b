"""Formatters that lay out market and chain data across the clock's screens."""

from __future__ import annotations

import math
import struct

from blockclock.utils import NUM_SCREENS, format_number_with_suffix, get_supply_at_block

CURRENCY_USD = "$"
CURRENCY_EUR = "["
CURRENCY_GBP = "]"
CURRENCY_JPY = "^"
CURRENCY_AUD = "_"
CURRENCY_CAD = "`"

CURRENCY_CODE_USD = "USD"
CURRENCY_CODE_EUR = "EUR"
CURRENCY_CODE_GBP = "GBP"
CURRENCY_CODE_JPY = "JPY"
CURRENCY_CODE_AUD = "AUD"
CURRENCY_CODE_CAD = "CAD"

_SYMBOLS = {
    CURRENCY_EUR: "[",
    CURRENCY_GBP: "]",
    CURRENCY_JPY: "^",
    CURRENCY_AUD: "$",
    CURRENCY_CAD: "$",
    CURRENCY_USD: "$",
}

_CODES = {
    CURRENCY_EUR: CURRENCY_CODE_EUR,
    CURRENCY_GBP: CURRENCY_CODE_GBP,
    CURRENCY_JPY: CURRENCY_CODE_JPY,
    CURRENCY_AUD: CURRENCY_CODE_AUD,
    CURRENCY_CAD: CURRENCY_CODE_CAD,
}

_CHARS = {code: char for char, code in _CODES.items()}

_HALVING_INTERVAL = 210_000
_MINUTES_PER_BLOCK = 10
_MINUTES_PER_YEAR = 525_600
_MINUTES_PER_DAY = 24 * 60
_SATS_PER_BTC = 1e8


def get_currency_symbol(currency: str) -> str:
    """Return the glyph shown on screen for a currency character."""
    return _SYMBOLS.get(currency, currency)


def get_currency_code(currency: str) -> str:
    """Return the three-letter code for a currency character, USD by default."""
    return _CODES.get(currency, CURRENCY_CODE_USD)


def get_currency_char(code: str) -> str:
    """Return the currency character for a three-letter code, USD by default."""
    return _CHARS.get(code, CURRENCY_USD)


def _fill(screens: list[str], text: str, first: int, end: int = NUM_SCREENS) -> None:
    screens[first:end] = list(text[first:end])


def _float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _round_half_away(value: float) -> int:
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def parse_price_data(
    price: int, currency_symbol: str, use_suffix_format: bool = False
) -> list[str]:
    """Lay out the bitcoin price in the given currency."""
    screens = [""] * NUM_SCREENS
    digits = str(price)
    if len(digits) >= NUM_SCREENS or use_suffix_format:
        digits = format_number_with_suffix(price, NUM_SCREENS - 2)
    price_string = get_currency_symbol(currency_symbol) + digits

    first = 0
    if len(price_string) < NUM_SCREENS:
        price_string = price_string.rjust(NUM_SCREENS)
        screens[0] = "BTC/" + get_currency_code(currency_symbol)
        first = 1

    _fill(screens, price_string, first)
    return screens


def parse_sats_per_currency(
    price: int, currency_symbol: str, with_sats_symbol: bool
) -> list[str]:
    """Lay out how many satoshis one unit of the currency buys."""
    if price <= 0:
        raise ValueError("price must be positive")

    screens = [""] * NUM_SCREENS
    sats = _round_half_away(_float32(1.0 / _float32(price)) * _SATS_PER_BTC)
    sats_string = str(sats)
    if len(sats_string) >= NUM_SCREENS:
        return screens

    sats_symbol_index = NUM_SCREENS - len(sats_string) - 1
    sats_string = sats_string.rjust(NUM_SCREENS)
    if currency_symbol != CURRENCY_USD:
        screens[0] = "SATS/" + get_currency_code(currency_symbol)
    else:
        screens[0] = "MSCW/TIME"

    _fill(screens, sats_string, 1)
    if with_sats_symbol:
        screens[sats_symbol_index] = "STS"
    return screens


def parse_block_height(block_height: int) -> list[str]:
    """Lay out the current block height."""
    screens = [""] * NUM_SCREENS
    height = str(block_height)
    first = 0
    if len(height) < NUM_SCREENS:
        height = height.rjust(NUM_SCREENS)
        screens[0] = "BLOCK/HEIGHT"
        first = 1
    _fill(screens, height, first)
    return screens


def parse_block_fees(block_fees: int) -> list[str]:
    """Lay out the fee rate, with its unit on the last screen."""
    screens = [""] * NUM_SCREENS
    fees = str(block_fees)
    first = 0
    if len(fees) < NUM_SCREENS:
        fees = fees.rjust(NUM_SCREENS - 1)
        screens[0] = "FEE/RATE"
        first = 1
    _fill(screens, fees, first, NUM_SCREENS - 1)
    screens[NUM_SCREENS - 1] = "sat/vB"
    return screens


def parse_halving_countdown(block_height: int, as_blocks: bool) -> list[str]:
    """Lay out the distance to the next halving, in blocks or in time."""
    screens = [""] * NUM_SCREENS
    blocks_left = _HALVING_INTERVAL - block_height % _HALVING_INTERVAL
    minutes_left = blocks_left * _MINUTES_PER_BLOCK

    if as_blocks:
        blocks = str(blocks_left)
        first = 0
        if len(blocks) < NUM_SCREENS:
            blocks = blocks.rjust(NUM_SCREENS)
            screens[0] = "HAL/VING"
            first = 1
        _fill(screens, blocks, first)
        return screens

    years, rest = divmod(minutes_left, _MINUTES_PER_YEAR)
    days, rest = divmod(rest, _MINUTES_PER_DAY)
    hours, mins = divmod(rest, 60)
    screens[0] = "BIT/COIN"
    screens[1] = "HAL/VING"
    screens[NUM_SCREENS - 5] = f"{years}/YRS"
    screens[NUM_SCREENS - 4] = f"{days}/DAYS"
    screens[NUM_SCREENS - 3] = f"{hours}/HRS"
    screens[NUM_SCREENS - 2] = f"{mins}/MINS"
    screens[NUM_SCREENS - 1] = "TO/GO"
    return screens


def parse_market_cap(
    block_height: int, price: int, currency_symbol: str, big_chars: bool
) -> list[str]:
    """Lay out the market capitalisation, shortened or in groups of three digits."""
    screens = [""] * NUM_SCREENS
    market_cap = int(get_supply_at_block(block_height) * float(price))
    screens[0] = get_currency_code(currency_symbol) + "/MCAP"

    if big_chars:
        text = currency_symbol + format_number_with_suffix(market_cap, NUM_SCREENS - 2)
        _fill(screens, text.rjust(NUM_SCREENS), 1)
        return screens

    digits = str(market_cap)
    digits = digits.rjust(len(digits) + (3 - len(digits) % 3) % 3)
    groups = len(digits) // 3
    if groups >= NUM_SCREENS:
        raise ValueError("market cap too large to display")

    screens[NUM_SCREENS - groups - 1] = f" {currency_symbol} "
    for index in range(groups):
        screens[NUM_SCREENS - groups + index] = digits[index * 3 : index * 3 + 3]
    return screens