"""Breadth-first search over crossing-puzzle states.

Edges are the moves from :func:`crossing_solver.moves.generate_moves` whose
resulting state passes :func:`crossing_solver.state.is_safe`.  Each state is
enqueued at most once, so the first path that reaches it is a shortest one and
the whole search touches at most ``config.state_count`` states.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .moves import Move, describe_move, valid_moves
from .puzzle import PuzzleConfig
from .state import check_state, decode, is_safe, unsafe_pairs_in

__all__ = ["SearchResult", "solve"]

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Outcome of one :func:`solve` call."""

    config: PuzzleConfig
    found: bool
    moves: list[Move] = field(default_factory=list)
    # initial ... goal when found, empty otherwise
    states: list[int] = field(default_factory=list)
    explored: int = 0

    @property
    def steps(self) -> int:
        return len(self.moves)

    def describe(self) -> list[str]:
        """Numbered, human-readable move list (1-based)."""
        return [
            f"{i}. {describe_move(move, self.config)}"
            for i, move in enumerate(self.moves, start=1)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "puzzle": self.config.to_dict(),
            "found": self.found,
            "steps": self.steps,
            "explored": self.explored,
            "moves": [
                {
                    "step": i,
                    "cargo": [self.config.entities[c] for c in move.cargo],
                    "to": move.arrives.label(self.config),
                    "description": describe_move(move, self.config),
                }
                for i, move in enumerate(self.moves, start=1)
            ],
            "states": [
                {name: bank.label(self.config) for name, bank in decode(s, self.config).items()}
                for s in self.states
            ],
        }


def _rebuild(parents: dict[int, Move | None], goal: int) -> list[Move]:
    path: list[Move] = []
    move = parents[goal]
    while move is not None:
        path.append(move)
        move = parents[move.before]
    path.reverse()
    return path


def solve(
    config: PuzzleConfig,
    *,
    initial: int | None = None,
    goal: int | None = None,
) -> SearchResult:
    """Find a minimal-length move sequence from *initial* to *goal*.

    Defaults to the config's all-origin and all-destination states.  An
    unreachable goal is reported through ``found=False``; a start state that
    is out of range or already unsafe raises ``ValueError``.
    """
    start = check_state(config.initial_state if initial is None else initial, config)
    target = check_state(config.goal_state if goal is None else goal, config)
    if not is_safe(start, config):
        broken = ", ".join(
            f"{config.entities[a]}/{config.entities[b]}" for a, b in unsafe_pairs_in(start, config)
        )
        raise ValueError(f"Initial state {start} is unsafe: {broken}")

    if start == target:
        logger.info("[crossing-solver] start is already the goal")
        return SearchResult(config, True, [], [start], explored=1)

    parents: dict[int, Move | None] = {start: None}
    queue: deque[int] = deque([start])
    while queue:
        state = queue.popleft()
        for move in valid_moves(state, config):
            if move.after in parents:
                continue
            parents[move.after] = move
            if move.after == target:
                path = _rebuild(parents, target)
                states = [start] + [m.after for m in path]
                logger.info(
                    "[crossing-solver] solved in %d moves (%d states explored)",
                    len(path),
                    len(parents),
                )
                return SearchResult(config, True, path, states, explored=len(parents))
            queue.append(move.after)
        logger.debug(
            "[crossing-solver] expanded state %d; %d queued, %d seen",
            state,
            len(queue),
            len(parents),
        )

    logger.info(
        "[crossing-solver] no solution; frontier exhausted after %d states", len(parents)
    )
    return SearchResult(config, False, [], [], explored=len(parents))
