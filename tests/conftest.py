import importlib
import os
from pathlib import Path

os.environ.update(
    {
        "SECRET_KEY": "test-secret",
        "ADMIN_USERNAME": "admin",
        "ADMIN_PASSWORD": "admin-password-123",
    }
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tests.helpers import ADMIN_PASSWORD  # noqa: E402

SETTINGS_MODULES = (
    "app.mailadmin.core.config",
    "app.mailadmin.core.security",
    "app.mailadmin.db.session",
    "app.mailadmin.db.seed",
    "app.mailadmin.schemas.listing",
    "app.main",
)


def _setup_app(database_url: str):
    os.environ["DATABASE_URL"] = database_url
    os.environ["ADMIN_PASSWORD"] = ADMIN_PASSWORD

    # Every module that binds ``settings`` by name is reloaded after the config it reads.
    modules = [importlib.reload(importlib.import_module(name)) for name in SETTINGS_MODULES]
    session, main = modules[2], modules[-1]
    return main.create_app(), session


@pytest.fixture()
def app_and_session(tmp_path: Path):
    db_path = tmp_path / "test.db"
    app, session = _setup_app(f"sqlite+pysqlite:///{db_path}")
    yield app, session
    session.engine.dispose()


@pytest.fixture()
def client(app_and_session):
    app, _ = app_and_session
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def db_session(client, app_and_session):
    _, session = app_and_session
    db = session.SessionLocal()
    try:
        yield db
    finally:
        db.close()
