from __future__ import annotations

import json
import pathlib
import sys
from collections.abc import Callable, Iterable

import pytest
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _load_dependencies():
    from flowgen import Config, create_app
    from backend.flowgen.extensions import db

    return Config, create_app, db


ConfigBase, create_app, db = _load_dependencies()


class TestConfig(ConfigBase):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    CORS_ALLOWED_ORIGINS = "http://localhost"
    RATELIMIT_ENABLED = False


def ndjson(*records: object) -> str:
    """Render records the way the model emits them: one JSON object per line."""

    return "".join(json.dumps(record) + "\n" for record in records)


def trigger_node(node_id: str, trigger_type: str | None = "Manual") -> dict[str, object]:
    config = {"triggerType": trigger_type} if trigger_type else {}
    return {
        "id": node_id,
        "type": "trigger",
        "position": {"x": 100, "y": 200},
        "data": {"label": node_id, "type": "trigger", "config": config, "status": "idle"},
    }


def action_node(node_id: str, config: dict[str, object] | None = None) -> dict[str, object]:
    return {
        "id": node_id,
        "type": "action",
        "position": {"x": 400, "y": 200},
        "data": {"label": node_id, "type": "action", "config": config or {}, "status": "idle"},
    }


@pytest.fixture(scope="module")
def app():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def clean_database(request):
    yield
    if "app" not in request.fixturenames:
        return
    from backend.flowgen.models import RunLog, Workflow

    db.session.query(RunLog).delete()
    db.session.query(Workflow).delete()
    db.session.commit()


@pytest.fixture()
def fragment_source(app):
    """Register a fake model call replaying the given fragments."""

    from backend.flowgen.generation import set_fragment_source

    requests: list[object] = []

    def register(fragments: Iterable[str] | Callable[[object], Iterable[str]]) -> list[object]:
        def source(generation_request):
            requests.append(generation_request)
            if callable(fragments):
                return fragments(generation_request)
            return iter(list(fragments))

        set_fragment_source(app, source)
        return requests

    yield register
    set_fragment_source(app, None)
