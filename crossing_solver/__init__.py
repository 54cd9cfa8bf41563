"""Public package interface for the crossing‑puzzle solver.

Importing this package gives you easy access to the top‑level helpers without
having to know the internal module layout.

Typical usage
-------------
>>> from crossing_solver import PuzzleConfig, solve
>>> cfg = PuzzleConfig(("Fox", "Goose", "Grain"), [("Fox", "Goose"), ("Goose", "Grain")])
>>> solve(cfg).steps
7
"""
from importlib.metadata import version as _version  # type: ignore

from .moves import Move, describe_move, generate_moves, valid_moves
from .puzzle import ConfigError, PuzzleConfig, load_config
from .search import SearchResult, solve
from .state import Bank, is_safe
from .verification import PathReport, assert_valid_path, verify_path

__all__ = [
    "Bank",
    "ConfigError",
    "Move",
    "PathReport",
    "PuzzleConfig",
    "SearchResult",
    "assert_valid_path",
    "describe_move",
    "generate_moves",
    "is_safe",
    "load_config",
    "solve",
    "valid_moves",
    "verify_path",
    "__version__",
]

try:
    __version__ = _version("crossing_solver")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
