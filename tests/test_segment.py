import pytest

from blockclock.qr.segment import (
    ALPHANUMERIC_CHARSET,
    Mode,
    Segment,
    calc_segment_bit_length,
    calc_segment_buffer_size,
    get_total_bits,
    is_alphanumeric,
    is_numeric,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_numeric,
    num_char_count_bits,
)


def _bit_string(seg):
    return "".join(map(str, seg.bits))


def _read(bits, pos, width):
    return int("".join(map(str, bits[pos : pos + width])) or "0", 2)


def _decode_numeric(seg):
    out, pos, remaining = [], 0, seg.num_chars
    while remaining:
        count = min(3, remaining)
        width = count * 3 + 1
        out.append(str(_read(seg.bits, pos, width)).zfill(count))
        pos += width
        remaining -= count
    assert pos == seg.bit_length
    return "".join(out)


def _decode_alphanumeric(seg):
    out, pos, remaining = [], 0, seg.num_chars
    while remaining:
        if remaining >= 2:
            value = _read(seg.bits, pos, 11)
            out.append(ALPHANUMERIC_CHARSET[value // 45] + ALPHANUMERIC_CHARSET[value % 45])
            pos += 11
            remaining -= 2
        else:
            out.append(ALPHANUMERIC_CHARSET[_read(seg.bits, pos, 6)])
            pos += 6
            remaining -= 1
    assert pos == seg.bit_length
    return "".join(out)


@pytest.mark.parametrize(
    "text, expected",
    [("", True), ("0123456789", True), ("12a", False), ("1 2", False), ("\u0663", False)],
)
def test_is_numeric(text, expected):
    assert is_numeric(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [(ALPHANUMERIC_CHARSET, True), ("HELLO WORLD", True), ("hello", False), ("A#B", False)],
)
def test_is_alphanumeric(text, expected):
    assert is_alphanumeric(text) is expected


def test_segment_mode_indicator_values():
    segs = [
        make_numeric("1"),
        make_alphanumeric("A"),
        make_bytes(b"a"),
        Segment(8, 0, []),
        make_eci(1),
    ]
    assert [int(seg.mode) for seg in segs] == [1, 2, 4, 8, 7]
    assert segs[3].mode is Mode.KANJI


@pytest.mark.parametrize(
    "mode, count, expected",
    [
        (Mode.NUMERIC, 3, 10),
        (Mode.ALPHANUMERIC, 2, 11),
        (Mode.BYTE, 1, 8),
        (Mode.KANJI, 1, 13),
        (Mode.ECI, 0, 24),
        (Mode.BYTE, 0, 0),
    ],
)
def test_calc_segment_bit_length(mode, count, expected):
    assert calc_segment_bit_length(mode, count) == expected


def test_calc_segment_bit_length_errors():
    with pytest.raises(ValueError):
        calc_segment_bit_length(Mode.BYTE, 4096)
    with pytest.raises(ValueError):
        calc_segment_bit_length(Mode.NUMERIC, 32768)
    with pytest.raises(ValueError):
        calc_segment_bit_length(Mode.ECI, 1)


def test_calc_segment_buffer_size_rounds_up_to_bytes():
    assert calc_segment_buffer_size(Mode.BYTE, 10) == 10
    assert calc_segment_buffer_size(Mode.NUMERIC, 3) == 2
    assert calc_segment_buffer_size(Mode.ECI, 0) == 3


@pytest.mark.parametrize(
    "mode, widths",
    [
        (Mode.NUMERIC, (10, 12, 14)),
        (Mode.ALPHANUMERIC, (9, 11, 13)),
        (Mode.BYTE, (8, 16, 16)),
        (Mode.KANJI, (8, 10, 12)),
        (Mode.ECI, (0, 0, 0)),
    ],
)
def test_num_char_count_bits(mode, widths):
    assert (
        num_char_count_bits(mode, 1),
        num_char_count_bits(mode, 9),
        num_char_count_bits(mode, 10),
        num_char_count_bits(mode, 26),
        num_char_count_bits(mode, 27),
        num_char_count_bits(mode, 40),
    ) == (widths[0], widths[0], widths[1], widths[1], widths[2], widths[2])


def test_num_char_count_bits_rejects_bad_version():
    with pytest.raises(ValueError):
        num_char_count_bits(Mode.BYTE, 0)
    with pytest.raises(ValueError):
        num_char_count_bits(Mode.BYTE, 41)


def test_make_numeric_worked_example():
    seg = make_numeric("01234567")
    assert seg.mode is Mode.NUMERIC
    assert seg.num_chars == 8
    assert _bit_string(seg) == "0000001100" + "0101011001" + "1000011"


def test_make_alphanumeric_worked_example():
    seg = make_alphanumeric("AC-42")
    assert seg.num_chars == 5
    assert _bit_string(seg) == "00111001110" + "11100111001" + "000010"


@pytest.mark.parametrize("digits", ["", "0", "07", "123", "9876543210", "000000001"])
def test_make_numeric_round_trip(digits):
    seg = make_numeric(digits)
    assert seg.bit_length == calc_segment_bit_length(Mode.NUMERIC, len(digits))
    assert _decode_numeric(seg) == digits


@pytest.mark.parametrize("text", ["", "A", "HELLO WORLD", ALPHANUMERIC_CHARSET, "$%*+-./:"])
def test_make_alphanumeric_round_trip(text):
    seg = make_alphanumeric(text)
    assert seg.bit_length == calc_segment_bit_length(Mode.ALPHANUMERIC, len(text))
    assert _decode_alphanumeric(seg) == text


def test_make_numeric_and_alphanumeric_reject_bad_text():
    with pytest.raises(ValueError):
        make_numeric("12x")
    with pytest.raises(ValueError):
        make_alphanumeric("lower")


def test_make_bytes_round_trip():
    payload = bytes(range(256))
    seg = make_bytes(payload)
    assert seg.mode is Mode.BYTE
    assert seg.num_chars == 256
    assert seg.bit_length == 256 * 8
    assert seg.data == payload


def test_make_bytes_too_long():
    with pytest.raises(ValueError):
        make_bytes(b"\x00" * 4096)


def test_make_eci_one_byte():
    seg = make_eci(127)
    assert seg.mode is Mode.ECI
    assert seg.num_chars == 0
    assert seg.data == bytes([127])


def test_make_eci_two_bytes():
    seg = make_eci(128)
    assert seg.bit_length == 16
    assert _bit_string(seg) == "10" + format(128, "014b")


def test_make_eci_three_bytes():
    seg = make_eci(999_999)
    assert seg.bit_length == 24
    bits = _bit_string(seg)
    assert bits[:3] == "110"
    assert int(bits[3:14], 2) == 999_999 >> 10
    assert int(bits[14:], 2) == 999_999 & 0x3FF


@pytest.mark.parametrize("value", [-1, 1_000_000])
def test_make_eci_out_of_range(value):
    with pytest.raises(ValueError):
        make_eci(value)


def test_segment_validation():
    with pytest.raises(ValueError):
        Segment(Mode.BYTE, 1, (0, 2))
    with pytest.raises(ValueError):
        Segment(Mode.BYTE, -1, ())
    seg = Segment(2, 1, [1, 0, 1])
    assert seg.mode is Mode.ALPHANUMERIC
    assert seg.bits == (1, 0, 1)
    assert seg.data == bytes([0b10100000])


def test_get_total_bits_sums_headers_and_data():
    segs = [make_bytes(b"abc"), make_numeric("12345")]
    for version in (1, 10, 27):
        expected = sum(4 + num_char_count_bits(s.mode, version) + s.bit_length for s in segs)
        assert get_total_bits(segs, version) == expected
    assert get_total_bits([], 1) == 0


def test_get_total_bits_count_field_overflow():
    segs = [make_bytes(b"x" * 256)]
    assert get_total_bits(segs, 1) is None
    assert get_total_bits(segs, 10) == 4 + 16 + 256 * 8


def test_get_total_bits_total_overflow():
    big = make_bytes(b"x" * 4000)
    assert get_total_bits([big], 40) is not None
    assert get_total_bits([big, big], 40) is None