"""Puzzle configuration for the crossing solver.

A :class:`PuzzleConfig` fixes the entity set, the unsafe-together rules, the
ferry capacity and the display names used when describing moves.  All
validation happens at construction time so that a config which exists is a
config the search engine can trust.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

__all__ = ["ConfigError", "PuzzleConfig", "load_config"]

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"entities", "unsafe", "capacity", "operator", "origin", "destination"}


class ConfigError(ValueError):
    """Raised when a puzzle configuration is malformed."""


@dataclass(frozen=True)
class PuzzleConfig:
    """Immutable description of one crossing puzzle instance."""

    entities: tuple[str, ...]
    # Accepts pairs by name or index; normalised to sorted index pairs.
    unsafe_pairs: frozenset[tuple[int, int]] = field(default_factory=frozenset)
    capacity: int = 1
    operator: str = "Farmer"
    origin: str = "Origin"
    destination: str = "Destination"

    def __post_init__(self) -> None:
        if isinstance(self.entities, (str, bytes)) or not isinstance(self.entities, Iterable):
            raise ConfigError(
                f"Entities must be a list of names, got {type(self.entities).__name__}"
            )
        raw = list(self.entities)
        for idx, name in enumerate(raw):
            if not isinstance(name, str):
                raise ConfigError(f"Entity {idx} must be a name string, got {name!r}")
        names = tuple(name.strip() for name in raw)
        capacity = self.capacity
        operator = str(self.operator)
        for idx, name in enumerate(names):
            if not name:
                raise ConfigError(f"Entity {idx} has an empty name")
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ConfigError(f"Duplicate entity names: {', '.join(dupes)}")

        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigError(f"Capacity must be an integer, got {capacity!r}")
        if capacity < 1:
            raise ConfigError(f"Capacity must be at least 1, got {capacity}")

        if not operator.strip():
            raise ConfigError("Operator name must not be empty")
        if operator in names:
            raise ConfigError(f"Operator name {operator!r} clashes with an entity name")
        if str(self.origin) == str(self.destination):
            raise ConfigError(f"Bank names must differ, both are {self.origin!r}")

        rules = self.unsafe_pairs
        if isinstance(rules, (str, bytes)) or not isinstance(rules, Iterable):
            raise ConfigError(
                f"Safety rules must be a collection of pairs, got {type(rules).__name__}"
            )
        pairs = frozenset(_normalize_pair(rule, names) for rule in rules)

        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "entities", names)
        object.__setattr__(self, "unsafe_pairs", pairs)
        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "origin", str(self.origin))
        object.__setattr__(self, "destination", str(self.destination))
        logger.debug(
            "[crossing-solver] config: %d entities, %d rules, capacity %d",
            len(names),
            len(pairs),
            capacity,
        )

    # ------------------------------------------------------------------
    # Derived values
    @property
    def n_entities(self) -> int:
        return len(self.entities)

    @property
    def operator_bit(self) -> int:
        """Bit index holding the operator's bank."""
        return len(self.entities)

    @property
    def state_count(self) -> int:
        return 1 << (len(self.entities) + 1)

    @property
    def initial_state(self) -> int:
        return 0

    @property
    def goal_state(self) -> int:
        # Nothing to ferry: the empty puzzle is solved where it starts.
        if not self.entities:
            return self.initial_state
        return self.state_count - 1

    def entity_index(self, name: str) -> int:
        try:
            return self.entities.index(name)
        except ValueError:
            raise ConfigError(f"Unknown entity {name!r}") from None

    # ------------------------------------------------------------------
    # (De)serialisation
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PuzzleConfig":
        """Build a config from a JSON-shaped mapping.

        Expected keys: ``entities`` (required list of names), ``unsafe``
        (list of two-element pairs, by name or index), and optionally
        ``capacity``, ``operator``, ``origin``, ``destination``.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Puzzle config must be an object, got {type(data).__name__}")
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        if "entities" not in data:
            raise ConfigError("Puzzle config is missing 'entities'")
        entities = data["entities"]
        if not isinstance(entities, list):
            raise ConfigError("'entities' must be a list of names")
        unsafe = data.get("unsafe", [])
        if not isinstance(unsafe, list):
            raise ConfigError("'unsafe' must be a list of pairs")

        kwargs: dict[str, Any] = {}
        for key in ("capacity", "operator", "origin", "destination"):
            if key in data:
                kwargs[key] = data[key]
        return cls(entities, unsafe, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entities": list(self.entities),
            "unsafe": [
                [self.entities[a], self.entities[b]] for a, b in sorted(self.unsafe_pairs)
            ],
            "capacity": self.capacity,
            "operator": self.operator,
            "origin": self.origin,
            "destination": self.destination,
        }


def _normalize_pair(rule: Sequence[str | int], names: tuple[str, ...]) -> tuple[int, int]:
    if isinstance(rule, (str, bytes)) or not isinstance(rule, Sequence) or len(rule) != 2:
        raise ConfigError(f"Safety rule must be a pair of entities, got {rule!r}")

    def _resolve(ref: str | int) -> int:
        if isinstance(ref, bool):
            raise ConfigError(f"Safety rule {rule!r} references invalid entity {ref!r}")
        if isinstance(ref, int):
            if not 0 <= ref < len(names):
                raise ConfigError(
                    f"Safety rule {rule!r} references undefined entity index {ref}"
                )
            return ref
        if ref not in names:
            raise ConfigError(f"Safety rule {rule!r} references undefined entity {ref!r}")
        return names.index(ref)

    a, b = (_resolve(ref) for ref in rule)
    if a == b:
        raise ConfigError(f"Safety rule {rule!r} pairs an entity with itself")
    return (a, b) if a < b else (b, a)


def load_config(path: str | Path) -> PuzzleConfig:
    """Read a JSON puzzle file and return the validated config."""
    p = Path(path)
    try:
        text = p.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read puzzle file {p}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Puzzle file {p} is not valid JSON: {exc}") from exc
    logger.info("[crossing-solver] loaded puzzle from %s", p)
    return PuzzleConfig.from_dict(data)
