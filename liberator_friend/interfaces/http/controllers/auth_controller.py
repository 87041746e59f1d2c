# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from urllib.parse import urlencode

from flask import Blueprint, Response, jsonify, redirect, render_template_string, request
from pydantic import ValidationError

from liberator_friend.domain.users.exceptions import InvalidCredentialsError
from liberator_friend.infrastructure.auth.identity import IdentityResolver
from liberator_friend.interfaces.http.dto.auth import LoginRequestDTO, LoginSuccessDTO
from liberator_friend.shared.errors.validation import raise_validation_error
from liberator_friend.shared.logging import logger

LOGIN_PAGE = """<!doctype html>
<html>
  <head><title>Log in</title></head>
  <body>
    <h1>Log in</h1>
    {% if failed %}<p class="error">Login failed, try again.</p>{% endif %}
    <form method="post" action="{{ action }}">
      <label>Username <input type="text" name="username" value="{{ username }}"></label>
      <label>Password <input type="password" name="password"></label>
      <button type="submit">Log in</button>
    </form>
  </body>
</html>
"""


class AuthController:
    def __init__(
        self,
        *,
        identities: IdentityResolver,
        login_uri: str,
        logout_uri: str,
        landing_uri: str,
    ) -> None:
        self._identities = identities
        self._login_uri = login_uri
        self._logout_uri = logout_uri
        self._landing_uri = landing_uri

    def login_form(self) -> str:
        return render_template_string(
            LOGIN_PAGE,
            action=self._login_uri,
            failed=request.args.get("login_failed") == "Y",
            username=request.args.get("username", ""),
        )

    def login(self):
        if request.is_json:
            return self._login_json()

        username = request.form.get("username", "")
        try:
            dto = LoginRequestDTO.model_validate(
                {"username": username, "password": request.form.get("password", "")}
            )
            identity = self._identities.login(dto.username, dto.password)
        except (ValidationError, InvalidCredentialsError):
            logger.info(f"auth.login: failed username={username}")
            query = urlencode({"login_failed": "Y", "username": username})
            return redirect(f"{self._login_uri}?{query}")

        logger.info(f"auth.login: ok username={identity.username}")
        return redirect(self._identities.pop_target(self._landing_uri))

    def _login_json(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        identity = self._identities.login(dto.username, dto.password)
        payload = LoginSuccessDTO(username=identity.username, roles=sorted(identity.roles))
        logger.info(f"auth.login: ok username={identity.username} (json)")
        return jsonify(payload.model_dump()), 200

    def logout(self):
        self._identities.logout()
        logger.info("auth.logout: ok")
        return redirect(self._landing_uri)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule(self._login_uri, view_func=self.login_form, methods=["GET"])
        bp.add_url_rule(
            self._login_uri, endpoint="login_submit", view_func=self.login, methods=["POST"]
        )
        bp.add_url_rule(self._logout_uri, view_func=self.logout, methods=["GET", "POST"])
        return bp
