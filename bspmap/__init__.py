"""
project: bspmap
module: __init__.py

Flask application factory and core extensions setup.

Wires together the Flask app and SQLAlchemy for the thin host layer that
generates BSP tile maps on request and remembers the parameters of every map
it produced. Configuration is sourced from environment variables with
reasonable defaults for development. A local `instance/` directory is used
for SQLite and the rotating log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy

# Load .env if present so `SECRET_KEY`, `DATABASE_URL`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still work with an explicit DATABASE_URL
    pass

secret_key = os.getenv("SECRET_KEY", "dev-secret-change-me")
database_url = os.getenv("DATABASE_URL")

if not database_url:
    is_pytest = bool(os.getenv("PYTEST_CURRENT_TEST"))
    db_filename = "bspmap_test.db" if is_pytest else "bspmap.db"
    db_path = Path(app.instance_path) / db_filename
    # POSIX path for SQLAlchemy URI compatibility across OS
    database_url = f"sqlite:///{db_path.as_posix()}"

app.config.update(
    SECRET_KEY=secret_key,
    SQLALCHEMY_DATABASE_URI=database_url,
    SQLALCHEMY_TRACK_MODIFICATIONS=False,
    # Map generation defaults used when a request omits a parameter
    BSPMAP_DEFAULT_WIDTH=int(os.getenv("BSPMAP_DEFAULT_WIDTH", "40")),
    BSPMAP_DEFAULT_HEIGHT=int(os.getenv("BSPMAP_DEFAULT_HEIGHT", "40")),
    BSPMAP_DEFAULT_MIN_ROOM=os.getenv("BSPMAP_DEFAULT_MIN_ROOM", "6,6"),
    BSPMAP_DEFAULT_MAX_ROOM=os.getenv("BSPMAP_DEFAULT_MAX_ROOM", "10,10"),
    BSPMAP_MAP_CACHE_MAX=int(os.getenv("BSPMAP_MAP_CACHE_MAX", "32")),
)

engine_opts = {}
if database_url.startswith("sqlite:///"):
    engine_opts["connect_args"] = {
        "timeout": 10,  # busy timeout (seconds) for sqlite
        "check_same_thread": False,
    }
db = SQLAlchemy(app, session_options={"expire_on_commit": False}, engine_options=engine_opts)


from bspmap.routes.map_api import bp_maps  # noqa: E402

app.register_blueprint(bp_maps)

# Route map debug output. Suppress with BSPMAP_SUPPRESS_ROUTE_MAP=1
if not (os.getenv("BSPMAP_SUPPRESS_ROUTE_MAP") in ("1", "true", "yes") or app.config.get("SUPPRESS_ROUTE_MAP")):
    print("Registered routes:")
    print(app.url_map)


def create_app():
    """Return the Flask app instance with its tables created."""
    from bspmap import models  # noqa: F401

    with app.app_context():
        db.create_all()
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
