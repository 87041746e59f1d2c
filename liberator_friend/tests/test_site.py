from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from liberator_friend.app import create_app
from liberator_friend.interfaces.http.site import WELCOME
from liberator_friend.shared.config import AppConfig, AuthConfig

PLAIN = {"Accept": "text/plain"}
JSON = {"Accept": "application/json"}
HTML = {"Accept": "text/html"}

ROOT = ("root", "admin_password")
JANE = ("jane", "user_password")


def test_index(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == WELCOME
    assert response.headers["X-Frame-Options"] == "DENY"


def test_admin_requires_role_json(client: FlaskClient) -> None:
    anonymous = client.get("/admin", headers=JSON)
    as_user = client.get("/admin", headers=JSON, auth=JANE)

    for response in (anonymous, as_user):
        assert response.status_code == 401
        assert response.get_json() == {"success": False, "message": "Not authorized!"}


def test_admin_as_admin(client: FlaskClient) -> None:
    response = client.get("/admin", headers=PLAIN, auth=ROOT)

    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "Welcome, admin!"
    assert "Accept" in response.headers["Vary"]


def test_unknown_route_json(client: FlaskClient) -> None:
    response = client.get("/nonexistent", headers=JSON)

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Resource not found."}


def test_user_with_unacceptable_type(client: FlaskClient) -> None:
    response = client.get("/user", headers={"Accept": "text/xml"}, auth=JANE)

    assert response.status_code == 406
    assert response.get_data(as_text=True) == "No acceptable resource available."


def test_unacceptable_html_gets_plain_text_body(client: FlaskClient) -> None:
    response = client.get("/user", headers=HTML, auth=JANE)

    assert response.status_code == 406
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "No acceptable resource available."


@pytest.mark.parametrize(
    ("path", "credentials", "body"),
    [
        ("/admin", ROOT, "Welcome, admin!"),
        ("/user", JANE, "Welcome, user!"),
        ("/authenticated", JANE, "Come on in. You're authenticated."),
        ("/authenticated", ROOT, "Come on in. You're authenticated."),
    ],
)
def test_protected_resources(
    client: FlaskClient, path: str, credentials: tuple[str, str], body: str
) -> None:
    response = client.get(path, auth=credentials)

    assert response.status_code == 200
    assert response.get_data(as_text=True) == body


def test_plain_error_bodies(client: FlaskClient) -> None:
    not_found = client.get("/missing", headers=PLAIN)
    not_acceptable = client.get("/user", headers={"Accept": "image/png"}, auth=JANE)
    unauthorized = client.get("/user", headers=PLAIN)

    assert not_found.status_code == 404
    assert not_found.get_data(as_text=True) == "Resource not found."
    assert not_acceptable.status_code == 406
    assert not_acceptable.get_data(as_text=True) == "No acceptable resource available."
    assert unauthorized.status_code == 401
    assert unauthorized.get_data(as_text=True) == "Not authorized."


def test_json_error_bodies(client: FlaskClient) -> None:
    not_acceptable = client.get("/user", headers=JSON, auth=JANE)
    unauthorized = client.get("/user", headers=JSON, auth=ROOT)

    assert not_acceptable.status_code == 406
    assert not_acceptable.get_json() == {
        "success": False,
        "message": "No acceptable resource available",
    }
    assert unauthorized.status_code == 401
    assert unauthorized.get_json() == {"success": False, "message": "Not authorized!"}


def test_unknown_route_html_page(client: FlaskClient) -> None:
    response = client.get("/missing", headers=HTML)

    assert response.status_code == 404
    assert response.mimetype == "text/html"
    assert response.get_data(as_text=True) == "Route not found!"


def test_unauthorized_challenges_basic_auth(client: FlaskClient) -> None:
    response = client.get("/admin", headers=PLAIN, auth=("root", "wrong"))

    assert response.status_code == 401
    challenge = response.headers["WWW-Authenticate"]
    assert challenge.lower().startswith("basic")
    assert "liberator-friend" in challenge


def test_method_not_allowed(client: FlaskClient) -> None:
    response = client.post("/admin", headers=PLAIN)
    as_json = client.delete("/user", headers=JSON)

    assert response.status_code == 405
    assert response.headers["Allow"] == "GET"
    assert response.get_data(as_text=True) == "Method not allowed."
    assert as_json.get_json() == {"success": False, "message": "Method not allowed."}


def test_head_is_answered_for_get_resources(client: FlaskClient) -> None:
    response = client.head("/admin", auth=ROOT)

    assert response.status_code == 200
    assert response.get_data() == b""


def test_unexpected_errors_return_json(app: Flask) -> None:
    def explode():
        raise RuntimeError("boom")

    app.add_url_rule("/explode", view_func=explode)

    response = app.test_client().get("/explode")

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_basic_auth_can_be_disabled() -> None:
    config = AppConfig(
        app_env="test",
        secret_key="test-secret",
        auth=AuthConfig(password_hash_method="pbkdf2:sha256:1000", allow_basic_auth=False),
    )
    client = create_app(config).test_client()

    response = client.get("/admin", headers=PLAIN, auth=ROOT)

    assert response.status_code == 401
    assert "WWW-Authenticate" not in response.headers


def test_request_id_is_echoed(client: FlaskClient) -> None:
    response = client.get("/", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
