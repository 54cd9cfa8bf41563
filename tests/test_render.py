from pathlib import Path

import pytest

from crossing_solver.puzzle import PuzzleConfig
from crossing_solver.render import position_matrix, render_solution, show_timeline
from crossing_solver.search import solve

CFG = PuzzleConfig(["Fox", "Goose", "Grain"], [("Fox", "Goose"), ("Goose", "Grain")])


def test_position_matrix_tracks_each_row() -> None:
    grid = position_matrix(solve(CFG))
    assert grid.shape == (4, 8)
    assert grid[:, 0].tolist() == [0, 0, 0, 0]
    assert grid[:, -1].tolist() == [1, 1, 1, 1]
    # operator row alternates every step
    assert grid[3].tolist() == [0, 1, 0, 1, 0, 1, 0, 1]
    # goose is the first passenger
    assert grid[1, 1] == 1


def test_position_matrix_unsolved_has_initial_column() -> None:
    cfg = PuzzleConfig(["A", "B", "C"], [("A", "B"), ("B", "C"), ("A", "C")])
    grid = position_matrix(solve(cfg))
    assert grid.shape == (4, 1)


def test_render_headless_uses_agg(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    path = render_solution(solve(CFG))
    try:
        assert Path(path).is_file()
        assert Path(path).read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
        import matplotlib
        assert matplotlib.get_backend().lower() == "agg"
    finally:
        Path(path).unlink(missing_ok=True)


def test_render_to_explicit_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    target = tmp_path / "timeline.png"
    out = render_solution(solve(CFG), target)
    assert out == str(target)
    assert target.is_file()


def test_show_timeline_opens_rendered_png(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    png = render_solution(solve(CFG), tmp_path / "timeline.png")
    import matplotlib.pyplot as plt

    shown: list[tuple[int, ...]] = []
    monkeypatch.setattr(plt, "show", lambda: shown.append(plt.gca().get_images()[0].get_array().shape))
    show_timeline(png)
    assert len(shown) == 1
    assert shown[0][-1] == 4


def test_show_timeline_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        show_timeline(tmp_path / "missing.png")
