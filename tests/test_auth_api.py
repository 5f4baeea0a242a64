# tests/test_auth_api.py

from __future__ import annotations

import pytest

import app as app_module

from .conftest import bearer, register


def test_register_returns_user_and_token(client):
    data = register(client, name="Ada", email="ada@example.com")

    assert data["user"]["name"] == "Ada"
    assert data["user"]["email"] == "ada@example.com"
    assert "password" not in data["user"]
    assert data["token"]


@pytest.mark.parametrize(
    "body, message",
    [
        ({"email": "ada@example.com", "password": "secret1"}, "All fields are required."),
        ({"name": "Ada", "email": "ada-at-example", "password": "secret1"}, "Invalid email format."),
        ({"name": "Ada", "email": "ada@example.com", "password": "123"}, "Password must be at least 6 characters long."),
    ],
)
def test_register_validation(client, body, message):
    response = client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"message": message}


def test_register_rejects_known_email(client):
    register(client)

    response = client.post(
        "/api/auth/register", json={"name": "Other", "email": "ada@example.com", "password": "secret2"}
    )

    assert response.status_code == 400
    assert response.get_json()["message"] == "Email already registered. Try logging in."


def test_register_without_json_body(client):
    response = client.post("/api/auth/register", data="name=Ada")

    assert response.status_code == 400
    assert response.get_json()["message"] == "All fields are required."


def test_login_returns_a_working_token(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret1"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["user"]["name"] == "Ada"
    assert client.get("/api/tasks", headers=bearer(data["token"])).status_code == 200


def test_login_with_wrong_password(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "wrong-one"})

    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid email or password."}


def test_login_with_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret1"})

    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "ada@example.com"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Please fill in all fields."


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not-a-token"},
        {"Authorization": "Basic YWRhOnNlY3JldA=="},
    ],
)
def test_task_routes_require_a_valid_bearer_token(client, headers):
    response = client.get("/api/tasks", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"message": "Not authorized"}


def test_expired_token_is_rejected(app, client):
    token = register(client)["token"]
    app.config["TOKEN_MAX_AGE"] = -1

    response = client.get("/api/tasks", headers=bearer(token))

    assert response.status_code == 401


def test_token_from_another_secret_is_rejected(app, client):
    token = register(client)["token"]
    app.config["SECRET_KEY"] = "rotated"

    assert client.get("/api/tasks", headers=bearer(token)).status_code == 401


def test_unknown_route_answers_json(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "message" in response.get_json()


def test_wrong_method_answers_json(client):
    response = client.patch("/api/tasks")

    assert response.status_code == 405
    assert "message" in response.get_json()


def test_register_and_login_with_a_password_longer_than_bcrypt_allows(client):
    password = "x" * 80
    register(client, password=password)

    response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": password})

    assert response.status_code == 200
    assert response.get_json()["token"]


def test_long_wrong_password_is_an_ordinary_failed_login(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "y" * 80})

    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid email or password."}


def test_long_passwords_differing_after_72_bytes_are_different(client):
    register(client, password="z" * 72 + "first")

    response = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "z" * 72 + "second"})

    assert response.status_code == 401


def test_concurrent_registration_of_one_email(client, monkeypatch):
    register(client)
    # The other request passed the lookup before this one committed
    monkeypatch.setattr(app_module, "email_taken", lambda email: False)

    response = client.post(
        "/api/auth/register", json={"name": "Twin", "email": "ada@example.com", "password": "secret2"}
    )

    assert response.status_code == 400
    assert response.get_json() == {"message": "Email already registered. Try logging in."}
    login = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret1"})
    assert login.status_code == 200
