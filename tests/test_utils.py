import pytest

from blockclock.utils import (
    format_number_with_suffix,
    get_amount_in_satoshis,
    get_supply_at_block,
    modulo,
)


def test_modulo_of_negative_wraps_around():
    assert modulo(-1, 7) == 6


@pytest.mark.parametrize("x", range(-20, 21))
def test_modulo_stays_in_range_and_is_congruent(x):
    result = modulo(x, 7)
    assert 0 <= result < 7
    assert (result - x) % 7 == 0


def test_supply_at_genesis_is_zero():
    assert get_supply_at_block(0) == 0


def test_supply_caps_after_final_halving():
    assert get_supply_at_block(33 * 210000) == 20999999.9769
    assert get_supply_at_block(40 * 210000) == 20999999.9769


def test_block_reward_before_first_halving():
    assert get_supply_at_block(210000) - get_supply_at_block(209999) == 50


def test_block_reward_halves_after_halving():
    assert get_supply_at_block(210001) - get_supply_at_block(210000) == 25


def test_supply_is_monotonic():
    heights = [0, 1, 209999, 210000, 420000, 630000, 840000, 6929999]
    supplies = [get_supply_at_block(h) for h in heights]
    assert supplies == sorted(supplies)


@pytest.mark.parametrize("num", [0, 7, 42, 999])
def test_small_numbers_are_printed_plainly(num):
    assert format_number_with_suffix(num) == str(num)


def test_suffix_with_decimals_uses_available_room():
    assert format_number_with_suffix(1_500_000, 5) == "1.50M"


@pytest.mark.parametrize(
    "num, suffix, scale",
    [
        (1_234, "K", 1_000),
        (56_789, "K", 1_000),
        (123_456_789, "M", 1_000_000),
        (9_876_543_210, "B", 1_000_000_000),
        (1_279_687_500_000, "T", 1_000_000_000_000),
        (2_000_000_000_000_000, "Q", 1_000_000_000_000_000),
    ],
)
def test_suffix_value_approximates_number(num, suffix, scale):
    result = format_number_with_suffix(num, 5)
    assert result.endswith(suffix)
    assert len(result) <= 5 or len(result.split(".")[0]) == len(result) - 1
    assert abs(float(result[:-1]) * scale - num) <= scale * 0.5


def test_negative_number_rejected():
    with pytest.raises(ValueError):
        format_number_with_suffix(-1)


def test_milli_multiplier():
    assert get_amount_in_satoshis("lnbc1m1pvjluezpp5qqqsyq") == 100000


def test_micro_multiplier():
    assert get_amount_in_satoshis("lnbc1u1pvjluez") == 100


def test_multipliers_agree_on_equal_amounts():
    assert get_amount_in_satoshis("lnbc5m1pxyz") == get_amount_in_satoshis(
        "lnbc5000u1pxyz"
    )
    assert get_amount_in_satoshis("lnbc20n1pxyz") == get_amount_in_satoshis(
        "lnbc20000p1pxyz"
    )


@pytest.mark.parametrize("invoice", ["lnbc", "lnbcxyz", "lnbc123", "lnbc12x1pabc"])
def test_invalid_invoices_rejected(invoice):
    with pytest.raises(ValueError):
        get_amount_in_satoshis(invoice)