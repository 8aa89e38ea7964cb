"""Tests for the command line entry point."""

import json
import logging
import os

import pytest

import space_sim
from spacecore.constants import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_list_scenes(capsys):
    assert space_sim.main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "earth" in out


def test_missing_scene_argument(capsys):
    assert space_sim.main([]) == 1
    err = capsys.readouterr().err
    assert "usage" in err
    assert "Found scenes" in err


def test_unknown_scene_is_fatal(tmp_path, capsys):
    assert space_sim.main(["no-such-scene", "--log-dir", str(tmp_path)]) == 1
    captured = capsys.readouterr()
    assert "Cannot load scene" in captured.err
    # nothing was drawn
    assert "\x1b[" not in captured.out


def test_runs_a_few_frames(tmp_path, capsys):
    rc = space_sim.main([
        "earth", "--frames", "2", "--substeps", "10", "--fps", "100", "--log-dir", str(tmp_path),
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert "\x1b[?47h" in out  # alternate screen
    assert out.count("S P A C E") == 2
    assert out.endswith("\x1b[?47l\x1b[?25h\x1b[4l\x1b[m")
    logs = list(tmp_path.glob("*/simulation.log"))
    assert len(logs) == 1
    assert "Loaded scene" in logs[0].read_text()


def test_log_file_created(tmp_path):
    space_sim.main(["earth", "--frames", "1", "--substeps", "1", "--log-dir", str(tmp_path),
                    "--log-level", "debug"])
    assert list(tmp_path.glob("*/simulation.log"))


def test_pygame_banner_hidden_by_entry_point():
    assert os.environ.get("PYGAME_HIDE_SUPPORT_PROMPT") == "1"


def test_coincident_bodies_do_not_crash(tmp_path, capsys):
    scene = tmp_path / "overlap.json"
    scene.write_text(json.dumps([
        {"name": "a", "mass": 1.0e20, "x": 5, "y": 5, "vx": 0, "vy": 0},
        {"name": "b", "mass": 1.0e20, "x": 5, "y": 5, "vx": 0, "vy": 0},
    ]), encoding="utf-8")

    rc = space_sim.main([str(scene), "--frames", "2", "--substeps", "1", "--fps", "100",
                         "--log-dir", str(tmp_path / "runs")])

    assert rc == 0
    assert capsys.readouterr().out.endswith("\x1b[?47l\x1b[?25h\x1b[4l\x1b[m")


def test_terminal_too_small_is_fatal(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "3")
    monkeypatch.setenv("LINES", "3")

    rc = space_sim.main(["earth", "--frames", "1", "--log-dir", str(tmp_path)])

    assert rc == 1
    captured = capsys.readouterr()
    assert "Cannot draw in a 3x3 terminal" in captured.err
    assert "\x1b[" not in captured.out
