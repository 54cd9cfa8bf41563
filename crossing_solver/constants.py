"""Package‑wide constants and demo puzzles."""

from typing import Any

CANONICAL_ENTITIES = ("Fox", "Goose", "Grain")
CANONICAL_UNSAFE = (("Fox", "Goose"), ("Goose", "Grain"))

# Minimal solution for the canonical instance
CANONICAL_SOLUTION_LENGTH = 7

DEMO_PUZZLES: dict[str, dict[str, Any]] = {
    "fox-goose-grain": {
        "entities": list(CANONICAL_ENTITIES),
        "unsafe": [list(p) for p in CANONICAL_UNSAFE],
    },
    "wolf-goat-cabbage": {
        "entities": ["Wolf", "Goat", "Cabbage"],
        "unsafe": [["Wolf", "Goat"], ["Goat", "Cabbage"]],
    },
    # every pair clashes, so the first crossing always strands two of them
    "quarrelsome-trio": {
        "entities": ["Cat", "Mouse", "Cheese"],
        "unsafe": [["Cat", "Mouse"], ["Mouse", "Cheese"], ["Cat", "Cheese"]],
    },
    "two-seat-ferry": {
        "entities": ["Fox", "Goose", "Grain", "Dog"],
        "unsafe": [["Fox", "Goose"], ["Goose", "Grain"], ["Dog", "Fox"]],
        "capacity": 2,
    },
}

DEFAULT_DEMO = "fox-goose-grain"

__all__ = [
    "CANONICAL_ENTITIES",
    "CANONICAL_UNSAFE",
    "CANONICAL_SOLUTION_LENGTH",
    "DEMO_PUZZLES",
    "DEFAULT_DEMO",
]
