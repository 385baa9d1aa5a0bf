"""Thin httpx wrapper for the iGEM API: URL building, session cookie, status checks."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any
from urllib.parse import quote

import httpx

from igem_uploader.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from igem_uploader.exceptions import TransportError
from igem_uploader.path import PathLike, sanitize

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


class RequestMethod(str, Enum):
    """HTTP methods used by the iGEM API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class ApiTransport:
    """Sends requests to the iGEM API over a shared httpx client.

    httpx.Client is safe to share between threads, so one transport serves
    every concurrent upload and delete worker.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/") + "/"
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    def build_url(self, path: PathLike) -> str:
        """Join a sanitised request path onto the base URL."""
        return self.api_url + "/".join(quote(segment, safe="") for segment in sanitize(path))

    def send_request(
        self,
        path: PathLike,
        method: RequestMethod,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        session_token: str | None = None,
    ) -> httpx.Response:
        """Send a request and return the response whatever its status.

        Query parameters whose value is None are left out entirely.

        Raises:
            TransportError: If no response was received
        """
        url = self.build_url(path)
        query = {key: value for key, value in (params or {}).items() if value is not None}
        headers = {"Cookie": f"{SESSION_COOKIE}={session_token}"} if session_token else {}

        logger.debug(f"Sending {method.value} request to {url} params={query}")
        try:
            response = self._client.request(
                method.value,
                url,
                params=query,
                json=json,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method.value} {url} failed: {e}") from e
        logger.debug(
            f"Received response with status {response.status_code}: {response.reason_phrase}"
        )
        return response

    @staticmethod
    def assert_status_code(
        response: httpx.Response,
        expected_status: int,
        message: str,
        error_class: type[TransportError] = TransportError,
    ) -> httpx.Response:
        """Return the response unchanged if its status matches, raise otherwise."""
        if response.status_code != expected_status:
            logger.debug(f"Unexpected response body: {response.text[:500]}")
            raise error_class(
                f"{message}\nExpected status code {expected_status}, "
                f"but received {response.status_code}: {response.reason_phrase}",
                expected_status=expected_status,
                status_code=response.status_code,
            )
        return response

    def clear_cookies(self) -> None:
        """Drop cookies the service set; the session is always sent explicitly."""
        self._client.cookies.clear()

    def close(self) -> None:
        if not self._client.is_closed:
            self._client.close()
