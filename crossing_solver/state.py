"""Bit-packed world states and the safety check.

A world state is a plain ``int``: bit ``i`` holds the bank of entity ``i``
and bit ``n`` (``config.operator_bit``) holds the operator's bank.  A cleared
bit means the origin bank, a set bit the destination bank.
"""
from __future__ import annotations

from enum import IntEnum

from .puzzle import PuzzleConfig

__all__ = [
    "Bank",
    "bank_of",
    "check_state",
    "decode",
    "entities_on",
    "is_safe",
    "unsafe_pairs_in",
]


class Bank(IntEnum):
    ORIGIN = 0
    DESTINATION = 1

    def label(self, config: PuzzleConfig) -> str:
        return config.origin if self is Bank.ORIGIN else config.destination


def bank_of(state: int, bit: int) -> Bank:
    return Bank((state >> bit) & 1)


def check_state(state: int, config: PuzzleConfig) -> int:
    """Return *state* unchanged or raise ``ValueError`` if it cannot occur."""
    if isinstance(state, bool) or not isinstance(state, int):
        raise ValueError(f"State must be an int bitmask, got {state!r}")
    if not 0 <= state < config.state_count:
        raise ValueError(
            f"State {state} out of range for {config.n_entities} entities "
            f"(expected 0..{config.state_count - 1})"
        )
    return state


def unsafe_pairs_in(state: int, config: PuzzleConfig) -> list[tuple[int, int]]:
    """List the safety rules *state* violates, in sorted order."""
    operator = (state >> config.operator_bit) & 1
    broken: list[tuple[int, int]] = []
    for a, b in sorted(config.unsafe_pairs):
        side_a = (state >> a) & 1
        if side_a == (state >> b) & 1 and side_a != operator:
            broken.append((a, b))
    return broken


def is_safe(state: int, config: PuzzleConfig) -> bool:
    """True when no unsafe pair shares a bank the operator is absent from."""
    operator = (state >> config.operator_bit) & 1
    for a, b in config.unsafe_pairs:
        side_a = (state >> a) & 1
        if side_a == (state >> b) & 1 and side_a != operator:
            return False
    return True


def entities_on(state: int, bank: Bank, config: PuzzleConfig) -> list[int]:
    return [i for i in range(config.n_entities) if (state >> i) & 1 == bank]


def decode(state: int, config: PuzzleConfig) -> dict[str, Bank]:
    """Map every entity name, plus the operator, to its bank."""
    out = {name: bank_of(state, i) for i, name in enumerate(config.entities)}
    out[config.operator] = bank_of(state, config.operator_bit)
    return out
