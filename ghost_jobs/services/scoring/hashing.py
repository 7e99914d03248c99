"""Stable string hashing for deterministic score spreading.

Python's built-in ``hash`` is salted per process, so it cannot be used here.
"""
from __future__ import annotations


HASH_VERSION = 1
HASH_MULTIPLIER = 31
_UINT32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def stable_hash(value: str) -> int:
    """Accumulate ``hash * 31 + code point`` in 32 bits and fold to a non-negative int."""
    acc = 0
    for char in value:
        acc = (acc * HASH_MULTIPLIER + ord(char)) & _UINT32
    if acc & _SIGN_BIT:
        acc -= _UINT32 + 1
    return abs(acc)


def entropy_term(seed: str, modulo: int) -> int:
    if modulo <= 0:
        return 0
    return stable_hash(seed) % modulo


def variation_term(hostname: str, word_count: int, url_length: int, modulo: int) -> int:
    """Spread of ``modulo`` values centred on zero, e.g. [-3, +3] for 7."""
    if modulo <= 0:
        return 0
    return stable_hash(f"{hostname}{word_count}{url_length}") % modulo - modulo // 2
