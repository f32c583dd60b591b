"""
Seeded PRNG - Mulberry32.

A small 32-bit generator that produces the same float stream for the
same seed on every platform. Boards are generated from this stream, so
its output is part of the replay contract: changing a single constant
here makes every recorded session unverifiable.
"""

from __future__ import annotations
from typing import Callable
import secrets

UINT32_MASK = 0xFFFFFFFF
UINT32_RANGE = 0x100000000

# Fixed odd increment added to the running state on every draw
MULBERRY32_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit multiply, wrapping like JavaScript's Math.imul (unsigned result)."""
    return (a * b) & UINT32_MASK


def create_seeded_random(seed: int) -> Callable[[], float]:
    """
    Create a generator returning floats in [0, 1).

    The only state is the closure's own counter; two generators built
    from the same seed yield identical streams when called in lockstep.
    Seeds are reduced modulo 2**32.
    """
    state = seed & UINT32_MASK

    def random() -> float:
        nonlocal state
        state = (state + MULBERRY32_INCREMENT) & UINT32_MASK
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_RANGE

    return random


def generate_seed() -> int:
    """
    Draw a fresh board seed from the host's non-deterministic source.

    This is the only non-deterministic function in the engine.
    """
    return secrets.randbelow(UINT32_MASK)
