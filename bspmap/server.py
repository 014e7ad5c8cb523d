import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from bspmap import app, create_app, db
from bspmap.logging_utils import get_logger

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Names mark the handlers this module owns so a second call swaps only those
HANDLER_NAMES = ("bspmap-file", "bspmap-console")

log = get_logger("bspmap.server")


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the tables, route stdlib logging to instance/app.log, then serve."""
    create_app()
    with app.app_context():
        log_path = _configure_logging()
    log.info(event="server_start", host=host, port=port, log_file=log_path)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(level: str | None = None) -> str:
    """Attach a rotating file handler and a console handler to the root logger.

    Flask, werkzeug and the 500 handler log through stdlib ``logging``; this
    routes them to ``<instance>/app.log`` (1 MB, 3 backups) and the console.
    The level comes from ``level`` or BSPMAP_SERVER_LOG_LEVEL (default INFO).
    Returns the log file path.
    """
    level = (level or os.getenv("BSPMAP_SERVER_LOG_LEVEL", "INFO")).upper()
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, "app.log")

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in HANDLER_NAMES:
            root.removeHandler(handler)
            handler.close()

    handlers = (
        RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(),
    )
    formatter = logging.Formatter(LOG_FORMAT)
    for name, handler in zip(HANDLER_NAMES, handlers):
        handler.set_name(name)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    return log_path


def list_maps():
    """Return (index, record) pairs for every stored map, oldest first."""
    from bspmap.models import GeneratedMap

    create_app()
    with app.app_context():
        records = GeneratedMap.query.order_by(GeneratedMap.id).all()
    return list(enumerate(records))


def clear_maps() -> int:
    from bspmap.models import GeneratedMap

    create_app()
    with app.app_context():
        cleared = GeneratedMap.query.delete()
        db.session.commit()
    return cleared
