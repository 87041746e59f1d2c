from __future__ import annotations

from flask.testing import FlaskClient

from liberator_friend.interfaces.http.middleware.authentication import FORBIDDEN_MESSAGE

HTML = {"Accept": "text/html"}
PLAIN = {"Accept": "text/plain"}


def _login(client: FlaskClient, username: str, password: str):
    return client.post("/login", data={"username": username, "password": password})


def test_login_form_renders(client: FlaskClient) -> None:
    response = client.get("/login")

    assert response.status_code == 200
    assert '<form method="post" action="/login">' in response.get_data(as_text=True)


def test_login_form_reports_failure(client: FlaskClient) -> None:
    response = client.get("/login", query_string={"login_failed": "Y", "username": "<jane>"})
    page = response.get_data(as_text=True)

    assert "Login failed" in page
    assert "&lt;jane&gt;" in page


def test_anonymous_html_client_is_sent_to_login(client: FlaskClient) -> None:
    challenge = client.get("/admin?tab=1", headers=HTML)

    assert challenge.status_code == 302
    assert challenge.headers["Location"] == "/login"

    login = _login(client, "root", "admin_password")

    assert login.status_code == 302
    assert login.headers["Location"] == "/admin?tab=1"


def test_session_login_grants_access(client: FlaskClient) -> None:
    login = _login(client, "jane", "user_password")
    response = client.get("/user", headers=PLAIN)

    assert login.headers["Location"] == "/"
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Welcome, user!"


def test_authenticated_html_client_without_role_is_forbidden(client: FlaskClient) -> None:
    _login(client, "jane", "user_password")

    response = client.get("/admin", headers=HTML)

    assert response.status_code == 403
    assert response.get_data(as_text=True) == FORBIDDEN_MESSAGE


def test_failed_form_login_redirects_back(client: FlaskClient) -> None:
    response = _login(client, "root", "wrong")

    assert response.status_code == 302
    assert response.headers["Location"] == "/login?login_failed=Y&username=root"


def test_blank_form_login_redirects_back(client: FlaskClient) -> None:
    response = _login(client, "", "")

    assert response.status_code == 302
    assert response.headers["Location"].startswith("/login?login_failed=Y")


def test_logout_clears_session(client: FlaskClient) -> None:
    _login(client, "root", "admin_password")
    assert client.get("/admin", headers=PLAIN).status_code == 200

    logout = client.get("/logout")
    after = client.get("/admin", headers=HTML)

    assert logout.status_code == 302
    assert logout.headers["Location"] == "/"
    assert after.status_code == 302
    assert after.headers["Location"] == "/login"


def test_json_login_success(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": "root", "password": "admin_password"})

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "username": "root", "roles": ["admin"]}
    assert client.get("/admin", headers=PLAIN).status_code == 200


def test_json_login_invalid_credentials(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": "root", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {
        "error": "invalid_credentials",
        "message": "Invalid username or password.",
    }


def test_json_login_invalid_payload_returns_422(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": "root"})

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"
