"""Move generation and move descriptions."""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterator

from .puzzle import PuzzleConfig
from .state import Bank, bank_of, entities_on, is_safe

__all__ = ["Move", "describe_move", "generate_moves", "valid_moves"]


@dataclass(frozen=True, slots=True)
class Move:
    """One ferry crossing from ``before`` to ``after``."""

    before: int
    after: int
    cargo: tuple[int, ...]
    arrives: Bank

    @property
    def alone(self) -> bool:
        return not self.cargo


def generate_moves(state: int, config: PuzzleConfig) -> Iterator[Move]:
    """Yield every candidate crossing from *state*, unfiltered.

    Order is fixed: the operator alone first, then each co-located entity in
    index order, then (capacity > 1 only) larger loads in lexicographic order.
    """
    op_bit = config.operator_bit
    here = bank_of(state, op_bit)
    arrives = Bank(1 - here)
    flipped = state ^ (1 << op_bit)
    yield Move(state, flipped, (), arrives)

    aboard = entities_on(state, here, config)
    for size in range(1, min(config.capacity, len(aboard)) + 1):
        for cargo in combinations(aboard, size):
            child = flipped
            for idx in cargo:
                child ^= 1 << idx
            yield Move(state, child, cargo, arrives)


def valid_moves(state: int, config: PuzzleConfig) -> Iterator[Move]:
    """Candidates from :func:`generate_moves` whose resulting state is safe."""
    return (m for m in generate_moves(state, config) if is_safe(m.after, config))


def describe_move(move: Move, config: PuzzleConfig) -> str:
    bank = move.arrives.label(config)
    if move.alone:
        return f"{config.operator} crosses alone to {bank}"
    names = [config.entities[i] for i in move.cargo]
    if len(names) == 1:
        load = names[0]
    else:
        load = ", ".join(names[:-1]) + " and " + names[-1]
    return f"{config.operator} takes {load} to {bank}"
