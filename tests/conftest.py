import os
import sys
import tempfile

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Isolate the test database before the app module reads DATABASE_URL
_DB_DIR = tempfile.mkdtemp(prefix="bspmap-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_DB_DIR}/test.db")
os.environ.setdefault("BSPMAP_SUPPRESS_ROUTE_MAP", "1")

from bspmap import create_app, db  # noqa: E402
from bspmap.models import GeneratedMap  # noqa: E402
from bspmap.routes.map_api import clear_map_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    GeneratedMap.query.delete()
    db.session.commit()
    clear_map_cache()
    return test_app.test_client()
