"""Timeline rendering for solved crossings."""
from __future__ import annotations

import logging
import os
import tempfile
import warnings
from pathlib import Path

from .moves import describe_move
from .search import SearchResult

__all__ = ["render_solution", "position_matrix", "show_timeline"]

logger = logging.getLogger(__name__)


def _select_backend() -> None:
    """Use Tk when a display is around, otherwise the headless Agg backend."""
    import matplotlib  # type: ignore

    if matplotlib.get_backend().lower() in {"agg", "tkagg"}:
        return
    wants_gui = bool(os.environ.get("DISPLAY")) or (
        os.environ.get("MPLBACKEND", "").lower() == "tkagg"
    )
    if not wants_gui:
        matplotlib.use("Agg")
        return
    try:
        matplotlib.use("TkAgg")
    except (ImportError, ValueError) as exc:
        warnings.warn(f"TkAgg backend unavailable ({exc}); rendering with Agg", RuntimeWarning)
        matplotlib.use("Agg")


def show_timeline(path: str | Path) -> None:
    """Open a rendered timeline PNG in a Matplotlib window.

    Raises ``RuntimeError`` when Pillow or matplotlib is missing and
    ``OSError`` when the image cannot be read.
    """
    try:
        import numpy as np  # type: ignore
        from PIL import Image  # type: ignore
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(f"Cannot preview timeline; missing dependency: {exc}") from exc

    with Image.open(path) as img:
        pixels = np.asarray(img.convert("RGBA"))
    fig, ax = plt.subplots()
    ax.imshow(pixels)
    ax.axis("off")
    plt.show()
    plt.close(fig)


def position_matrix(result: SearchResult):  # noqa: ANN201 - numpy array
    """Return a ``(rows, steps + 1)`` array of bank bits.

    Rows are the entities in index order followed by the operator; columns
    are the states along the path.  Unsolved results yield the initial state
    only.
    """
    import numpy as np  # type: ignore

    config = result.config
    states = result.states or [config.initial_state]
    bits = config.n_entities + 1
    return np.array(
        [[(s >> row) & 1 for s in states] for row in range(bits)],
        dtype=np.uint8,
    ).reshape(bits, len(states))


def render_solution(result: SearchResult, path: str | Path | None = None) -> str:
    """Render *result* to a **PNG file** and return the file path (string)."""
    try:
        import matplotlib  # type: ignore  # noqa: F401
        import matplotlib.pyplot as plt  # type: ignore
        from matplotlib.colors import ListedColormap  # type: ignore
    except ImportError as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError(
            "matplotlib is required to render solutions. Install it or run without --render."
        ) from exc

    _select_backend()

    config = result.config
    grid = position_matrix(result)
    rows = list(config.entities) + [config.operator]

    fig, ax = plt.subplots(figsize=(max(4, 1 + 0.8 * grid.shape[1]), 1 + 0.6 * len(rows)))
    cmap = ListedColormap(["#d9c27a", "#5b8fd1"])
    ax.imshow(grid, cmap=cmap, vmin=0, vmax=1, aspect="auto")

    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels(rows)
    ax.set_xticks(range(grid.shape[1]))
    ax.set_xticklabels([str(i) for i in range(grid.shape[1])])
    ax.set_xlabel("step")
    if result.found:
        title = f"{result.steps} moves: {config.origin} (sand) → {config.destination} (blue)"
    else:
        title = "No solution"
    ax.set_title(title)
    # annotate each column with the crossing that produced it
    for col, move in enumerate(result.moves, start=1):
        ax.annotate(
            describe_move(move, config),
            xy=(col, -0.5),
            xytext=(0, 4),
            textcoords="offset points",
            rotation=30,
            fontsize=6,
            ha="left",
            va="bottom",
            annotation_clip=False,
        )

    if path is None:
        fd, tmp = tempfile.mkstemp(suffix=".png")
        os.close(fd)
        png_path = Path(tmp)
    else:
        png_path = Path(path)
    try:
        fig.tight_layout()
        fig.savefig(png_path, format="png")
    finally:
        plt.close(fig)
    logger.info("[crossing-solver] timeline written to %s", png_path)
    return str(png_path)
