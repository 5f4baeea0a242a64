# tests/conftest.py

from __future__ import annotations

import httpx
import pytest

from app import create_app
from config import TestingConfig
from dashboard import ApiClient, Dashboard, Session, TokenStore
from extensions import db


@pytest.fixture()
def app():
    """A fresh application on its own in-memory database."""
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, name="Ada", email="ada@example.com", password="secret1"):
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(client):
    return bearer(register(client)["token"])


@pytest.fixture()
def messages() -> list[str]:
    """Everything the dashboard showed to the user."""
    return []


@pytest.fixture()
def token_store(tmp_path) -> TokenStore:
    return TokenStore(tmp_path / "token")


@pytest.fixture()
def confirm_answers() -> list[bool]:
    """Answers for the delete confirmation; empty means 'yes'."""
    return []


@pytest.fixture()
def dashboard(app, token_store, messages, confirm_answers) -> Dashboard:
    """
    Dashboard talking to the test app in-process through WSGI.

    Nothing listens on a socket; requests go straight into the Flask app.
    """
    session = Session(token_store)
    api = ApiClient(session, base_url="http://testserver", transport=httpx.WSGITransport(app=app))

    def confirm(prompt):
        return confirm_answers.pop(0) if confirm_answers else True

    return Dashboard(api, session, notify=messages.append, confirm=confirm)
