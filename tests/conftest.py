"""Pytest fixtures for igem_uploader tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest
from helpers import API, TEAM_ID, TEAM_PATH, FakeApi

from igem_uploader import IgemClient


@pytest.fixture(autouse=True)
def no_debug_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's IGEM_* environment out of the tests."""
    for name in (
        "IGEM_DEBUG",
        "IGEM_API_URL",
        "IGEM_TIMEOUT",
        "IGEM_TEAM_ID",
        "IGEM_USERNAME",
        "IGEM_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_api() -> FakeApi:
    """A FakeApi that accepts sign-in, auth/me and sign-out."""
    api = FakeApi()
    api.add(
        "POST",
        f"{API}/auth/sign-in",
        201,
        headers={"set-cookie": "session=abc123; Path=/; HttpOnly"},
    )
    api.add(
        "GET",
        f"{API}/auth/me",
        200,
        json={
            "uuid": "u-1",
            "id": 42,
            "publicName": "Ada",
            "username": "ada",
            "privileges": [],
            "photoURL": "https://example.org/ada.png",
            "firstName": "Ada",
        },
    )
    api.add("POST", f"{API}/auth/sign-out", 201)
    return api


@pytest.fixture
def client(fake_api: FakeApi) -> Any:
    """An IgemClient wired to fake_api, with no session started."""
    c = IgemClient(TEAM_ID, "ada", "secret", transport=fake_api.transport)
    yield c
    c.close()


@pytest.fixture
def session_client(client: IgemClient) -> IgemClient:
    """An IgemClient with an active session."""
    client.start_session()
    return client


@pytest.fixture
def upload_route(fake_api: FakeApi) -> FakeApi:
    """Accept uploads and answer with a URL built from the directory and file name."""

    def respond(request: httpx.Request) -> httpx.Response:
        directory = request.url.params.get("directory")
        name = request.content.split(b'filename="', 1)[1].split(b'"', 1)[0].decode()
        key = f"{directory}/{name}" if directory else name
        return httpx.Response(201, text=f"https://static.igem.wiki/teams/{TEAM_ID}/{key}")

    fake_api.route("POST", TEAM_PATH, respond)
    return fake_api


@pytest.fixture
def patch_cli_client() -> Any:
    """Patch igem_uploader.cli.get_client to return a MagicMock client."""
    with patch("igem_uploader.cli.get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.__enter__.return_value = mock_client
        mock_client.__exit__.return_value = None
        mock_get_client.return_value = mock_client
        yield mock_client
