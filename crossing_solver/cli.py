"""Command‑line interface wrapper around :pyfunc:`crossing_solver.solve`."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import constants as C
from .puzzle import ConfigError, PuzzleConfig, load_config
from .search import SearchResult, solve

__all__ = ["main"]


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(
        description="Solve river-crossing puzzles with a minimal number of ferry trips"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--config", help="Path to a JSON puzzle description")
    source.add_argument(
        "--demo",
        choices=sorted(C.DEMO_PUZZLES),
        help=f"Solve a bundled puzzle (default: {C.DEFAULT_DEMO})",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--out", help="Write JSON output to file")
    parser.add_argument("--render", help="Write a PNG timeline of the solution to this path")
    parser.add_argument("--preview", action="store_true", help="Preview the rendered PNG")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for crossing_solver",
    )
    return parser.parse_args(argv)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("crossing_solver")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def _load_puzzle(ns: argparse.Namespace) -> PuzzleConfig:
    if ns.config:
        return load_config(ns.config)
    return PuzzleConfig.from_dict(C.DEMO_PUZZLES[ns.demo or C.DEFAULT_DEMO])


def _print_result(result: SearchResult) -> None:
    config = result.config
    if not result.found:
        print(
            f"No solution: {config.operator} cannot ferry "
            f"{', '.join(config.entities)} to {config.destination} without breaking a rule."
        )
        return
    if not result.moves:
        print("Nothing to do: everything is already on the destination bank.")
        return
    print(f"Solved in {result.steps} moves:")
    for line in result.describe():
        print(line)


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)
    _configure_logging(ns.log_level)

    if ns.preview and not ns.render:
        sys.exit("Error: --preview requires --render.")

    try:
        config = _load_puzzle(ns)
    except ConfigError as exc:
        sys.exit(f"Error: {exc}")

    result = solve(config)

    json_out = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if ns.out:
        try:
            Path(ns.out).write_text(json_out, "utf-8")
        except OSError as exc:
            sys.exit(f"Error writing --out: {exc}")
        print(f"✔ Result JSON written to {ns.out}")

    if ns.json:
        print(json_out)
    else:
        _print_result(result)

    if ns.render:
        if not result.found:
            print("Nothing to render: no solution.", file=sys.stderr)
            return
        from .render import render_solution, show_timeline  # lazy: matplotlib is heavy

        try:
            png = render_solution(result, ns.render)
        except OSError as exc:
            sys.exit(f"Error writing --render: {exc}")
        print(f"✔ Timeline written to {png}")
        if ns.preview:
            try:
                show_timeline(png)
            except (RuntimeError, OSError) as exc:
                print(f"⚠️ Could not preview timeline image: {exc}", file=sys.stderr)


if __name__ == "__main__":  # pragma: no cover
    main()
