"""Screen layout for an incoming zap notification."""

from __future__ import annotations

from blockclock.utils import NUM_SCREENS


def parse_zap_notify(amount: int, with_sats_symbol: bool) -> list[str]:
    """Lay out a zap amount, right-aligned with an optional sats symbol before it."""
    text = str(amount)
    if len(text) > NUM_SCREENS:
        raise ValueError("zap amount too long for the display")

    screens = ["ZAP", "mdi-lnbolt"] + [""] * (NUM_SCREENS - 2)
    start = NUM_SCREENS - len(text)
    if start > 0 and with_sats_symbol:
        screens[start - 1] = "STS"
    screens[start:] = list(text)
    return screens