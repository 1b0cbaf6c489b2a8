"""Tests for the command-line level runner and entry point."""

import io

import numpy as np
import pytest

import gridcsp
from gridcsp.puzzle_config import PuzzleConfig
from gridcsp.solver import solver
from gridcsp.solver.config import SolverConfig
from gridcsp.solver.config import config as solver_config


def latin_config(rows):
    grid = np.array(rows, dtype=int)
    return PuzzleConfig(name="latin", dims=grid.shape, max_value=3, rules="latin", grid=grid)


def test_solve_one_logs_solution(capsys):
    logf = io.StringIO()
    assert solver.solve_one(latin_config([[1, 2, 3], [0, 0, 0], [0, 0, 0]]), logf=logf)

    log = logf.getvalue()
    assert "Selected puzzle: latin" in log
    assert "Solution found!" in log
    assert "Unique solution: False" in log
    assert "1 2 3\n2 3 1\n3 1 2" in capsys.readouterr().out


def test_solve_one_reports_failure():
    logf = io.StringIO()
    assert not solver.solve_one(latin_config([[1, 2, 0], [0, 0, 0], [0, 0, 3]]), logf=logf)
    assert "No solution found." in logf.getvalue()


def test_run_writes_log_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(solver_config, "log_dir", str(tmp_path / "logs"))
    assert solver.run(latin_config([[1, 2, 3], [2, 3, 1], [0, 0, 0]]))

    logfile = tmp_path / "logs" / "latin.log"
    assert logfile.is_file()
    assert "Unique solution: True" in logfile.read_text(encoding="utf-8")
    assert "Solution found!" in capsys.readouterr().out


def test_main_usage(monkeypatch, capsys):
    monkeypatch.setattr(gridcsp, "argv", ["gridcsp"])
    with pytest.raises(SystemExit) as exc_info:
        gridcsp.main()
    assert exc_info.value.code == 1
    assert "Usage" in capsys.readouterr().out


def test_main_solves_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(solver_config, "log_dir", str(tmp_path / "logs"))
    path = tmp_path / "rows.txt"
    path.write_text("2 3 3 row-unique\n\n1 . .\n. . 3\n", encoding="utf-8")
    monkeypatch.setattr(gridcsp, "argv", ["gridcsp", str(path)])

    gridcsp.main()
    out = capsys.readouterr().out
    assert "1 2 3\n1 2 3" in out
    assert (tmp_path / "logs" / "rows-1.log").is_file()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GRIDCSP_SEED", "17")
    monkeypatch.setenv("GRIDCSP_REPORT_INTERVAL", "50")
    settings = SolverConfig()
    assert settings.seed == 17
    assert settings.report_interval == 50
    assert settings.log_dir == "logs"


def test_settings_reject_bad_interval(monkeypatch):
    monkeypatch.setenv("GRIDCSP_REPORT_INTERVAL", "0")
    with pytest.raises(ValueError):
        SolverConfig()


def test_main_rejects_bad_seed(monkeypatch, capsys):
    monkeypatch.setattr(gridcsp, "argv", ["gridcsp", "generate", "abc"])
    with pytest.raises(SystemExit) as exc_info:
        gridcsp.main()
    assert exc_info.value.code == 1
    assert "Usage" in capsys.readouterr().out
