"""
project: Delve
module: game_api.py
License: MIT

JSON routes for creating games, submitting turn commands and reading the
read-only world snapshot.

Games live in an in-process dict keyed by a random id. The dict is guarded by
a module lock and every game carries its own lock so two requests never
interleave inside one turn.
"""

import threading
import uuid

from flask import Blueprint, current_app, jsonify, request

from delve.config import GameConfig
from delve.game import Command, Game, PlayerAction
from delve.logging_utils import get_logger

log = get_logger("delve.api")

bp_game = Blueprint("game", __name__)

_games = {}
_games_lock = threading.Lock()


def _store(game: Game) -> str:
    game_id = uuid.uuid4().hex[:12]
    max_games = current_app.config.get("DELVE_MAX_GAMES", 64)
    with _games_lock:
        _games[game_id] = (game, threading.Lock())
        # Small FIFO cap: drop the oldest session when full
        while len(_games) > max_games:
            oldest = next(iter(_games))
            _games.pop(oldest, None)
            log.info(event="game_evicted", game_id=oldest)
    return game_id


def _lookup(game_id: str):
    with _games_lock:
        return _games.get(game_id)


def _discard(game_id: str) -> None:
    with _games_lock:
        _games.pop(game_id, None)


def clear_games():
    with _games_lock:
        _games.clear()


def _not_found():
    return jsonify({"error": "not_found"}), 404


@bp_game.route("/api/game", methods=["POST"])
def new_game():
    """Create a game. Body: {"seed": int?}. Response: {game_id, state}."""
    payload = request.get_json(silent=True) or {}
    seed = payload.get("seed")
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            return jsonify({"error": "bad_seed"}), 400
    overrides = {"sight_radius": current_app.config.get("DELVE_SIGHT_RADIUS", 10)}
    if seed is not None:
        overrides["seed"] = seed
    config = GameConfig.from_env(**overrides)
    game = Game(config)
    game_id = _store(game)
    log.info(event="game_created", game_id=game_id, seed=game.seed)
    return jsonify({"game_id": game_id, "state": game.snapshot()}), 201


@bp_game.route("/api/game/<game_id>")
def game_state(game_id):
    entry = _lookup(game_id)
    if entry is None:
        return _not_found()
    game, lock = entry
    with lock:
        return jsonify({"state": game.snapshot()})


@bp_game.route("/api/game/<game_id>/command", methods=["POST"])
def game_command(game_id):
    """Resolve one turn. Body: {"command": "move_up" | "pick_up" | "rest" | "exit" | ...}."""
    entry = _lookup(game_id)
    if entry is None:
        return _not_found()
    game, lock = entry
    payload = request.get_json(silent=True) or {}
    command = Command.parse(payload.get("command"))
    with lock:
        action = game.step(command)
        state = game.snapshot()
    if action is PlayerAction.EXIT:
        _discard(game_id)
    return jsonify({"action": action.value, "state": state})


@bp_game.route("/api/game/<game_id>/descend", methods=["POST"])
def game_descend(game_id):
    entry = _lookup(game_id)
    if entry is None:
        return _not_found()
    game, lock = entry
    with lock:
        if not game.descend():
            return jsonify({"error": "not_on_stairs"}), 409
        return jsonify({"state": game.snapshot()})


@bp_game.route("/api/game/<game_id>/use", methods=["POST"])
def game_use_item(game_id):
    """Use an inventory item. Body: {"slot": int} (0 == 'a')."""
    entry = _lookup(game_id)
    if entry is None:
        return _not_found()
    game, lock = entry
    payload = request.get_json(silent=True) or {}
    try:
        slot = int(payload.get("slot"))
    except (TypeError, ValueError):
        return jsonify({"error": "bad_slot"}), 400
    with lock:
        if not 0 <= slot < len(game.inventory):
            return jsonify({"error": "bad_slot"}), 400
        used = game.use_item(slot)
        return jsonify({"used": used, "state": game.snapshot()})


__all__ = ["bp_game", "clear_games"]
