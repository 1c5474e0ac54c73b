"""Screen layouts for a BitAxe miner's statistics."""

from __future__ import annotations

from blockclock.utils import NUM_SCREENS


def parse_bitaxe_hash_rate(text: str) -> list[str]:
    """Lay out a hash rate, one digit per screen, ending with the GH/s unit."""
    if len(text) > NUM_SCREENS - 1:
        raise ValueError("hash rate text too long for the display")

    screens = [""] * NUM_SCREENS
    start = NUM_SCREENS - 1 - len(text)
    if start > 0:
        screens[start - 1] = "mdi:pickaxe"
    screens[start : start + len(text)] = list(text)
    screens[NUM_SCREENS - 1] = "GH/S"
    screens[0] = "BIT/AXE"
    return screens


def parse_bitaxe_best_diff(text: str) -> list[str]:
    """Lay out the best difficulty, one character per screen."""
    screens = [""] * NUM_SCREENS
    first = 0
    if len(text) < NUM_SCREENS:
        text = text.rjust(NUM_SCREENS)
        screens[0] = "BIT/AXE"
        screens[1] = "mdi:rocket"
        first = 2
    screens[first:] = list(text[first:NUM_SCREENS])
    return screens