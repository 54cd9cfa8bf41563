import json
import logging
from pathlib import Path
from typing import Any

import pytest

from crossing_solver import cli


@pytest.fixture(autouse=True)
def _restore_pkg_logger() -> Any:
    pkg_logger = logging.getLogger("crossing_solver")
    old_handlers = pkg_logger.handlers[:]
    old_level = pkg_logger.level
    old_propagate = pkg_logger.propagate
    yield
    for h in pkg_logger.handlers[:]:
        if h not in old_handlers:
            pkg_logger.removeHandler(h)
    pkg_logger.setLevel(old_level)
    pkg_logger.propagate = old_propagate


def test_default_run_prints_numbered_moves(capsys: Any) -> None:
    cli.main([])
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Solved in 7 moves:"
    assert out[1] == "1. Farmer takes Goose to Destination"
    assert out[-1] == "7. Farmer takes Goose to Destination"


def test_no_solution_is_normal_exit(capsys: Any) -> None:
    cli.main(["--demo", "quarrelsome-trio"])
    out = capsys.readouterr().out
    assert out.startswith("No solution: Farmer cannot ferry Cat, Mouse, Cheese to Destination")


def test_config_file_and_json_output(tmp_path: Path, capsys: Any) -> None:
    cfg = tmp_path / "puzzle.json"
    cfg.write_text(json.dumps({"entities": ["Sheep"], "operator": "Shepherd"}), "utf-8")
    cli.main(["--config", str(cfg), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["found"] is True
    assert data["moves"][0]["description"] == "Shepherd takes Sheep to Destination"


def test_out_writes_file(tmp_path: Path, capsys: Any) -> None:
    out_path = tmp_path / "result.json"
    cli.main(["--out", str(out_path)])
    assert "written to" in capsys.readouterr().out
    assert json.loads(out_path.read_text("utf-8"))["steps"] == 7


def test_empty_puzzle_message(tmp_path: Path, capsys: Any) -> None:
    cfg = tmp_path / "empty.json"
    cfg.write_text(json.dumps({"entities": []}), "utf-8")
    cli.main(["--config", str(cfg)])
    assert "Nothing to do" in capsys.readouterr().out


def test_bad_config_exits_with_error(tmp_path: Path) -> None:
    cfg = tmp_path / "bad.json"
    cfg.write_text(json.dumps({"entities": ["A"], "unsafe": [["A", "B"]]}), "utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main(["--config", str(cfg)])
    assert "undefined entity 'B'" in str(exc.value.code)


def test_preview_requires_render() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--preview"])
    assert exc.value.code == "Error: --preview requires --render."


def test_config_and_demo_are_exclusive(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--config", str(tmp_path / "x.json"), "--demo", "wolf-goat-cabbage"])


def test_render_flag_writes_png(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: Any) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    png = tmp_path / "t.png"
    cli.main(["--render", str(png)])
    assert png.is_file()
    assert "Timeline written" in capsys.readouterr().out


def test_log_level_is_isolated(capsys: Any) -> None:
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    for h in old_handlers:
        root.removeHandler(h)
    try:
        cli.main(["--log-level", "INFO"])
        logging.getLogger().info("root info")
        err = capsys.readouterr().err
        assert "solved in 7 moves" in err
        assert "root info" not in err
    finally:
        for h in old_handlers:
            root.addHandler(h)


def test_undecodable_config_exits_with_error(tmp_path: Path) -> None:
    cfg = tmp_path / "latin.json"
    cfg.write_bytes(b'{"entities": ["\xff\xfe"]}')
    with pytest.raises(SystemExit) as exc:
        cli.main(["--config", str(cfg)])
    assert str(exc.value.code).startswith("Error: Cannot read puzzle file")


def test_out_in_missing_directory_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--out", str(tmp_path / "nope" / "result.json")])
    assert str(exc.value.code).startswith("Error writing --out:")


def test_render_in_missing_directory_exits_with_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    with pytest.raises(SystemExit) as exc:
        cli.main(["--render", str(tmp_path / "nope" / "t.png")])
    assert str(exc.value.code).startswith("Error writing --render:")


def test_preview_failure_is_a_warning(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: Any
) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    from crossing_solver import render

    def no_window(path: str) -> None:
        raise RuntimeError("Cannot preview timeline; missing dependency: PIL")

    monkeypatch.setattr(render, "show_timeline", no_window)
    cli.main(["--render", str(tmp_path / "t.png"), "--preview"])
    assert "Could not preview timeline image" in capsys.readouterr().err
