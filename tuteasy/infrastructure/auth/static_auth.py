from __future__ import annotations

from tuteasy.application.ports.auth_context import AuthContextPort


class StaticAuthContext(AuthContextPort):
    """Bearer token handed over by the auth service; refresh is not handled here."""

    def __init__(self, access_token: str | None, user_id: str | None = None) -> None:
        self._access_token = access_token
        self._user_id = user_id

    def authorization_headers(self) -> dict[str, str]:
        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}

    def user_id(self) -> str | None:
        return self._user_id
