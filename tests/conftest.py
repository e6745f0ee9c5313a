"""Shared test fixtures for the checkout test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, CSRF off)
- client: Flask test client
- db_session: clean database per test (tables created/dropped)
- login_as: signs the test client in as an identity
- configurations: saved plain/silicone and textured/polycarbonate configurations
"""

import pytest

from caseshop import create_app
from caseshop.extensions import db as _db
from caseshop.models.configuration import Configuration
from caseshop.services.identity_service import SESSION_KEY


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Put an identity into the client's session, as the auth callback would."""

    def _login(identity_id="kp_buyer_123", email="buyer@example.com"):
        with client.session_transaction() as sess:
            sess["_user_id"] = identity_id
            sess["_fresh"] = True
            sess[SESSION_KEY] = {"id": identity_id, "email": email}
        return identity_id

    return _login


@pytest.fixture
def configurations(db_session):
    """Two saved configurations; returns their ids keyed by name."""
    plain = Configuration(
        finish="plain",
        material="silicone",
        image_url="https://cdn.example.com/plain.png",
    )
    premium = Configuration(
        finish="textured",
        material="polycarbonate",
        image_url="https://cdn.example.com/premium.png",
    )
    _db.session.add_all([plain, premium])
    _db.session.commit()

    # Plain ids so tests can use them across request contexts.
    return {"plain": plain.id, "premium": premium.id}
