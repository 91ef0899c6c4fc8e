"""Pytest fixtures for EthIQ Board tests."""

import os

import pytest

from ethiq.app import create_app
from ethiq.database import db

from tests.factories import ALL_FACTORIES

API_TOKEN = "test-api-token"


# ---------------------------------------------------------------------------
# Production database safety guard (session-scoped, autouse)
# ---------------------------------------------------------------------------


def _build_test_database_url() -> str:
    """TEST_DATABASE_URL if set, otherwise a private in-memory SQLite database."""
    return os.environ.get("TEST_DATABASE_URL") or "sqlite:///:memory:"


@pytest.fixture(scope="session", autouse=True)
def _force_test_database():
    """Force ALL tests to use the test database. Never connect to production.

    Sets DATABASE_URL (and the API token) before any test or fixture can
    create a Flask app.
    """
    overrides = {
        "DATABASE_URL": _build_test_database_url(),
        "ETHIQ_API_TOKEN": API_TOKEN,
    }
    originals = {key: os.environ.get(key) for key in overrides}
    os.environ.update(overrides)

    yield

    for key, original in originals.items():
        if original is not None:
            os.environ[key] = original
        else:
            os.environ.pop(key, None)


@pytest.fixture
def app(tmp_path):
    """Create a Flask application for testing.

    The config path points into tmp_path, so defaults plus environment
    overrides apply and log files land in the temporary directory.
    """
    app = create_app(config_path=str(tmp_path / "config.yaml"), testing=True)
    yield app


@pytest.fixture
def db_session(app):
    """Provide a database session with table cleanup on teardown."""
    with app.app_context():
        db.create_all()
        for factory_cls in ALL_FACTORIES:
            factory_cls._meta.sqlalchemy_session = db.session
        yield db.session
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture
def client(app):
    """Test client that sends the API bearer token on every request."""
    client = app.test_client()
    client.environ_base["HTTP_AUTHORIZATION"] = f"Bearer {API_TOKEN}"
    return client


@pytest.fixture
def anon_client(app):
    """Test client without credentials."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test CLI runner."""
    return app.test_cli_runner()
