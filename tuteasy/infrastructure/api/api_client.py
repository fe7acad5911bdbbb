from __future__ import annotations

import logging
from typing import Any

import httpx

from tuteasy.application.exceptions import DEFAULT_ERROR_MESSAGE, ConflictError, NetworkError
from tuteasy.application.ports.auth_context import AuthContextPort


class TutEasyApiClient:
    """JSON client for the TutEasy REST API.

    Responses come wrapped as ``{"success": bool, "data": ...}``; failures carry
    an ``error`` string that is passed through to the user untouched.
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthContextPort,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth = auth
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=payload)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._auth.authorization_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response) or str(e) or DEFAULT_ERROR_MESSAGE
            self._logger.error(
                "API request failed",
                extra={"method": method, "path": path, "status": e.response.status_code, "error": message},
            )
            if e.response.status_code == 409:
                raise ConflictError(message) from e
            raise NetworkError(message) from e
        except httpx.RequestError as e:
            self._logger.error("API unreachable", extra={"method": method, "path": path, "error": str(e)})
            raise NetworkError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        if response.status_code == 204 or not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError("Invalid response from server") from e
        if isinstance(body, dict) and "data" in body:
            if body.get("success") is False:
                raise NetworkError(body.get("error") or DEFAULT_ERROR_MESSAGE)
            return body["data"]
        return body


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error") or body.get("message")
        if isinstance(error, str) and error.strip():
            return error
    return None
