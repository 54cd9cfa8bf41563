"""Independent replay check for solution paths.

The search already only walks safe states; this module re-derives that fact
from the returned path alone so callers (and tests) can confirm a result
without trusting the search internals.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .moves import Move
from .puzzle import PuzzleConfig
from .state import bank_of, is_safe, unsafe_pairs_in

__all__ = ["PathReport", "assert_valid_path", "verify_path"]


@dataclass
class PathReport:
    ok: bool
    errors: list[str] = field(default_factory=list)


def _check_move(step: int, move: Move, config: PuzzleConfig) -> list[str]:
    errors: list[str] = []
    op_bit = config.operator_bit
    changed = move.before ^ move.after
    if not (changed >> op_bit) & 1:
        errors.append(f"step {step}: operator does not cross")
    carried = [i for i in range(config.n_entities) if (changed >> i) & 1]
    if len(carried) > config.capacity:
        errors.append(
            f"step {step}: {len(carried)} entities moved, capacity is {config.capacity}"
        )
    if tuple(carried) != tuple(sorted(move.cargo)):
        errors.append(f"step {step}: cargo {move.cargo} does not match state change")
    here = bank_of(move.before, op_bit)
    for idx in carried:
        if bank_of(move.before, idx) != here:
            errors.append(
                f"step {step}: {config.entities[idx]} was not on the operator's bank"
            )
    if bank_of(move.after, op_bit) != move.arrives:
        errors.append(f"step {step}: recorded arrival bank is wrong")
    return errors


def verify_path(
    config: PuzzleConfig,
    moves: Sequence[Move],
    *,
    initial: int | None = None,
    goal: int | None = None,
) -> PathReport:
    """Replay *moves* and collect every rule the path breaks."""
    start = config.initial_state if initial is None else initial
    target = config.goal_state if goal is None else goal
    errors: list[str] = []

    current = start
    if not is_safe(current, config):
        errors.append("initial state is unsafe")
    for step, move in enumerate(moves, start=1):
        if move.before != current:
            errors.append(f"step {step}: does not continue from the previous state")
        errors.extend(_check_move(step, move, config))
        for a, b in unsafe_pairs_in(move.after, config):
            errors.append(
                f"step {step}: {config.entities[a]} and {config.entities[b]} left unattended"
            )
        current = move.after
    if current != target:
        errors.append(f"path ends at state {current}, expected goal {target}")
    return PathReport(ok=not errors, errors=errors)


def assert_valid_path(config: PuzzleConfig, moves: Sequence[Move], **kwargs: int | None) -> None:
    report = verify_path(config, moves, **kwargs)
    if not report.ok:
        raise ValueError("Invalid path: " + "; ".join(report.errors))
