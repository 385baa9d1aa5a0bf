"""Shared test helpers for igem_uploader tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable

import httpx

from igem_uploader._internal.files import assert_supported_file_type
from igem_uploader.exceptions import LocalFileNotFoundError, TransportError
from igem_uploader.models import DirectoryListing, FileInfo, FolderInfo
from igem_uploader.path import RemotePath

TEAM_ID = 5115
API = "/v1"
TEAM_PATH = f"{API}/websites/teams/{TEAM_ID}"
STATIC_URL = f"https://static.igem.wiki/teams/{TEAM_ID}"


class FakeFileHandler:
    """In-memory stand-in for FileHandler that records every call.

    tree maps a joined remote directory ("" for the root) to a
    (folder names, file names) pair.
    """

    def __init__(
        self,
        tree: dict[str, tuple[list[str], list[str]]] | None = None,
        fail_on: set[str] | None = None,
        on_upload: Callable[[str], None] | None = None,
    ) -> None:
        self.tree = tree or {}
        self.fail_on = fail_on or set()
        self.on_upload = on_upload
        self._lock = threading.Lock()
        self.listed: list[str] = []
        self.deleted: list[str] = []
        self.uploaded: list[tuple[str, str]] = []

    def list_directory(self, remote: RemotePath) -> DirectoryListing:
        with self._lock:
            self.listed.append(remote.joined())
        folders, files = self.tree.get(remote.joined(), ([], []))
        prefix = remote.joined() + "/" if not remote.is_root else ""
        return DirectoryListing(
            folders=[FolderInfo(key=f"{prefix}{name}/", name=name) for name in folders],
            files=[FileInfo(key=f"{prefix}{name}", name=name) for name in files],
        )

    def delete_file(self, remote: RemotePath, file_name: str) -> None:
        key = remote.append(file_name).joined()
        if key in self.fail_on:
            raise TransportError(
                "Delete file failed!", expected_status=200, status_code=500
            )
        with self._lock:
            self.deleted.append(key)

    def upload_file(self, remote: RemotePath, local_dir: Path, file_name: str) -> str:
        if not (local_dir / file_name).is_file():
            raise LocalFileNotFoundError(f"File not found: {local_dir / file_name}")
        assert_supported_file_type(file_name)
        key = remote.append(file_name).joined()
        if self.on_upload is not None:
            self.on_upload(key)
        if key in self.fail_on:
            raise TransportError(
                "Upload file failed!", expected_status=201, status_code=500
            )
        with self._lock:
            self.uploaded.append((key, str(local_dir / file_name)))
        return f"{STATIC_URL}/{key}"


class FakeApi:
    """httpx.MockTransport handler routing on (method, url path).

    Unknown routes answer 404. Every request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status_code, json=json, headers=headers)
            return httpx.Response(status_code, text=text or "", headers=headers)

        self.routes[(method, path)] = respond

    def route(
        self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="Not Found")
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def make_tree(root: Path, files: list[str]) -> list[Path]:
    """Create files (with parent directories) under root and return their paths."""
    created = []
    for relative in files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"content of " + relative.encode())
        created.append(path)
    return created
