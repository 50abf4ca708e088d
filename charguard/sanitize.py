"""Deterministic text rewrite used by repair mode."""

from __future__ import annotations

from functools import lru_cache

from charguard.config import NBSP, ZERO_WIDTH, ScanConfig


@lru_cache(maxsize=8)
def _repair_table(allowed: frozenset[int]) -> dict[int, str | None]:
    table: dict[int, str | None] = {
        code: None for code in [*range(0x20), 0x7F] if code not in allowed
    }
    for code in ZERO_WIDTH - allowed:
        table[code] = None
    if NBSP not in allowed:
        table[NBSP] = " "
    return table


def repair_table(config: ScanConfig) -> dict[int, str | None]:
    """``str.translate`` table: zero-width and BOM removed, NBSP to space, controls removed."""
    return _repair_table(config.allowed)


def repair_text(text: str, config: ScanConfig) -> str:
    """Return *text* with every forbidden character removed or normalized.

    Allowed characters and anything outside the forbidden set are kept as-is,
    so applying this twice yields the same result as applying it once.
    """
    return text.translate(repair_table(config))

