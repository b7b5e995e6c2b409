"""
core/chord_engine/rng.py — Deterministic seeded selection.

Nothing in the chord engine touches the global ``random`` module: every
choice is a pure function of an explicit seed so results are reproducible.
"""

from __future__ import annotations

import time
from collections.abc import Callable

_MASK_32: int = 0xFFFFFFFF
_LCG_A: int = 1664525
_LCG_C: int = 1013904223
_FNV_OFFSET: int = 2166136261
_ZERO_SEED: int = 0xDEADBEEF


def seed_index(seed: int, size: int) -> int:
    """Map a seed onto ``range(size)`` as ``abs(seed) % size``."""
    if size <= 0:
        raise ValueError(f"size must be > 0, got {size}")
    return abs(int(seed)) % size


def wall_clock_seed() -> int:
    """Millisecond timestamp, for callers that want a fresh result each time."""
    return time.time_ns() // 1_000_000


def make_rng(seed: int | str) -> Callable[[], float]:
    """Return a Numerical Recipes LCG yielding floats in [0, 1).

    Integer seeds are truncated to 32 bits; string seeds are folded with a
    ×31 hash starting from the FNV offset basis. A zero state is replaced so
    the generator never sticks.

    Examples:
        >>> rng = make_rng(42)
        >>> rng() == make_rng(42)()
        True
    """
    if isinstance(seed, str):
        state = _FNV_OFFSET
        for ch in seed:
            state = (state * 31 + ord(ch)) & _MASK_32
    else:
        state = int(seed) & _MASK_32
    if state == 0:
        state = _ZERO_SEED

    def _next() -> float:
        nonlocal state
        state = (_LCG_A * state + _LCG_C) & _MASK_32
        return state / 0x100000000

    return _next
