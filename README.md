# blockclock

Turns Bitcoin figures into the text for a row of seven small display panels,
one string per panel, and encodes QR Codes with no outside dependencies.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Screen layouts

Each layout function returns a list of `NUM_SCREENS` (7) strings, one per
panel. The first panel usually holds a two-line label written as
`TOP/BOTTOM`. The remaining panels hold one character each, right-aligned,
with blank panels as `" "` or `""`.

```python
from blockclock.data_handler import (
    get_currency_char,
    parse_block_height,
    parse_halving_countdown,
    parse_market_cap,
    parse_price_data,
)

parse_block_height(840000)
# ['BLOCK/HEIGHT', '8', '4', '0', '0', '0', '0']

usd = get_currency_char("USD")          # '$'
parse_price_data(65000, usd, False)     # price with the currency glyph
parse_halving_countdown(840000, True)   # blocks to the next halving
parse_halving_countdown(840000, False)  # years, days, hours and minutes
parse_market_cap(840000, 65000, usd, True)
```

### `blockclock.data_handler`

- Currencies are single characters: `CURRENCY_USD` (`$`), `CURRENCY_EUR` (`[`),
  `CURRENCY_GBP` (`]`), `CURRENCY_JPY` (`^`), `CURRENCY_AUD` (`_`) and
  `CURRENCY_CAD` (`` ` ``). `get_currency_char` maps a three-letter code to one,
  `get_currency_code` maps back, and `get_currency_symbol` gives the glyph
  shown on screen. Unknown codes fall back to USD.
- `parse_price_data(price, currency_symbol, use_suffix_format=False)`: the price.
  Prices of seven or more digits, or with `use_suffix_format`, are shortened
  with a K/M/B/T/Q suffix.
- `parse_sats_per_currency(price, currency_symbol, with_sats_symbol)`: satoshis
  per unit of currency, labelled `MSCW/TIME` for USD. Raises `ValueError` for a
  price that is not positive.
- `parse_block_height(block_height)` and `parse_block_fees(block_fees)`: the
  latter ends with a `sat/vB` panel.
- `parse_halving_countdown(block_height, as_blocks)`
- `parse_market_cap(block_height, price, currency_symbol, big_chars)`: either
  shortened with a suffix, or split into groups of three digits. Raises
  `ValueError` if the grouped form does not fit the panels.

### `blockclock.bitaxe`

- `parse_bitaxe_hash_rate(text)`: one digit per panel, ending with `GH/S`.
  Raises `ValueError` if the text is longer than six characters.
- `parse_bitaxe_best_diff(text)`

### `blockclock.nostr_display`

- `parse_zap_notify(amount, with_sats_symbol)`: a zap amount, right-aligned,
  optionally preceded by a sats symbol panel.

### `blockclock.utils`

- `get_supply_at_block(block_nr)`: coins in circulation at a block height.
- `format_number_with_suffix(num, num_characters=4)`: shortens a number to
  `K`, `M`, `B`, `T` or `Q` form and fills the spare characters with decimals.
- `get_amount_in_satoshis(bolt11)`: reads the amount from a BOLT11 invoice's
  human-readable part (multipliers `m`, `u`, `n`, `p`). Raises `ValueError` if
  there is no amount or the multiplier is unknown.
- `modulo(x, n)`: a modulo that never returns a negative value for positive `n`.

## QR Codes

```python
from blockclock.qr.ecc import Ecc
from blockclock.qr.qrcode import Mask, encode_text

qr = encode_text("HELLO WORLD", Ecc.LOW, 1, 40, Mask.AUTO, True)
for y in range(qr.size):
    print("".join("##" if qr.get_module(x, y) else "  " for x in range(qr.size)))
```

`blockclock.qr.qrcode` provides:

- `encode_text` picks numeric, alphanumeric or UTF-8 byte mode.
- `encode_binary` encodes raw bytes.
- `encode_segments` and `encode_segments_advanced` encode hand-built segments.

The advanced functions take a version range, a `Mask` (or `Mask.AUTO` to pick
the lowest-penalty mask), and `boost_ecl`, which raises the error correction
level as far as the chosen version allows. The result is a frozen `QrCode`
with `version`, `ecl`, `mask`, `modules`, `size` and `get_module(x, y)`.
Coordinates out of bounds read as light. If the data does not fit, the
functions raise `DataTooLongError`, a `ValueError`.

Segments come from `make_numeric`, `make_alphanumeric`, `make_bytes` and
`make_eci` in `blockclock.qr.segment`. That module also has `Mode`, `Segment`
and the length helpers `is_numeric`, `is_alphanumeric`,
`calc_segment_bit_length`, `calc_segment_buffer_size`, `num_char_count_bits`
and `get_total_bits`.

`blockclock.qr.ecc` exposes the `Ecc` levels, the capacity tables and the
Reed-Solomon helpers used to build the codewords.

## What it does not do

The package only computes panel text and QR module grids. It does not fetch
prices, blocks, fees or zaps from any service. It does not draw fonts, drive
a display, or render QR Codes to images. It has no command-line tool.