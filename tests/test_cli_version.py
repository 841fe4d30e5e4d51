import importlib
import json
import sys

import pytest

from delve.config import GameConfig, LevelConfig
from delve.game import Game

# run.py is imported as a module; the server path is exercised with Flask.run patched out.


@pytest.fixture()
def run_module():
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "Delve" in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"


def test_server_main_runs_app(monkeypatch, run_module):
    calls = {}

    def fake_run(self, host=None, port=None, debug=None, **kw):
        calls.update(host=host, port=port, debug=debug)

    import flask

    monkeypatch.setattr(flask.Flask, "run", fake_run)
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    assert run_module.main(["server", "--debug"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5555, "debug": True}


def test_map_prints_level(run_module, capsys):
    assert run_module.main(["map", "--seed", "11"]) == 0
    out = capsys.readouterr().out
    assert "@" in out
    assert "seed=11" in out


def test_render_level_dimensions(run_module):
    game = Game(GameConfig(level=LevelConfig(width=40, height=20, max_rooms=6), seed=3))
    rows = run_module.render_level(game).splitlines()
    assert len(rows) == 20 and all(len(r) == 40 for r in rows)
    assert rows[game.player.y][game.player.x] == "@"


def test_simulate_summary(run_module, capsys, monkeypatch):
    monkeypatch.setenv("DELVE_LOG_LEVEL", "error")
    assert run_module.main(["simulate", "--seed", "5", "--turns", "30"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["seed"] == 5
    assert 0 <= summary["turns_taken"] <= 30
