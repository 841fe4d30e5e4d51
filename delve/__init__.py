"""
project: Delve
module: __init__.py
License: MIT

Flask application factory for the Delve simulation core.

The HTTP layer is a thin JSON surface over ``delve.game.Game``: renderers
create a game, post commands and read snapshots. Configuration is sourced
from environment variables (optionally via a local ``.env``) with sensible
defaults for development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

__version__ = "0.1.0"

# Load .env if present so DELVE_* settings can be supplied without exporting shell variables.
load_dotenv()


def create_app(overrides: dict | None = None) -> Flask:
    """Return a configured Flask app with the game blueprint registered."""
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DELVE_MAX_GAMES=int(os.getenv("DELVE_MAX_GAMES", "64")),
        DELVE_SIGHT_RADIUS=int(os.getenv("DELVE_SIGHT_RADIUS", "10")),
        JSON_SORT_KEYS=False,
    )
    if overrides:
        app.config.update(overrides)

    from delve.routes.game_api import bp_game

    app.register_blueprint(bp_game)

    # Error handling: contract breaches surface as 500 with a short correlation id
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "__version__"]
