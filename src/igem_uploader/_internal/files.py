"""Remote file operations for one team's website tree."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from igem_uploader._internal.transport import ApiTransport, RequestMethod
from igem_uploader.exceptions import (
    LocalFileNotFoundError,
    TransportError,
    UnsupportedFileTypeError,
)
from igem_uploader.models import DirectoryListing, FileType
from igem_uploader.path import RemotePath

logger = logging.getLogger(__name__)

UPLOADABLE_EXTENSIONS = frozenset(t.value for t in FileType if t is not FileType.FOLDER)


def file_extension(file_name: str) -> str:
    """Lower-cased text after the last dot (the whole name if there is none)."""
    return file_name.rsplit(".", 1)[-1].lower()


def assert_supported_file_type(file_name: str) -> None:
    """Raise UnsupportedFileTypeError unless the service accepts this extension."""
    extension = file_extension(file_name)
    if extension not in UPLOADABLE_EXTENSIONS:
        accepted = ", ".join(sorted(UPLOADABLE_EXTENSIONS))
        raise UnsupportedFileTypeError(
            f"Unsupported file type {extension}; must be [{accepted}]", extension
        )


class FileHandler:
    """List, upload and delete files under ``websites/teams/<team_id>``.

    Bound to a single session token; create a new handler per session.
    """

    def __init__(self, transport: ApiTransport, team_id: int, session_token: str) -> None:
        self._transport = transport
        self.team_id = team_id
        self._session_token = session_token

    def _team_path(self, *extra: str) -> list[str | int]:
        return ["websites", "teams", self.team_id, *extra]

    def list_directory(self, remote: RemotePath) -> DirectoryListing:
        """List the immediate folders and files of a remote directory."""
        response = self._transport.send_request(
            self._team_path(),
            RequestMethod.GET,
            params={"directory": remote.query_value()},
            session_token=self._session_token,
        )
        ApiTransport.assert_status_code(response, 200, "List directory failed!")
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"List directory failed!\nResponse body is not JSON: {e}",
                expected_status=200,
                status_code=response.status_code,
            ) from e
        return DirectoryListing.from_api(body or {})

    def upload_file(self, remote: RemotePath, local_dir: Path, file_name: str) -> str:
        """Upload ``local_dir/file_name`` into ``remote`` and return its public URL.

        The existence and extension checks run before any request is sent.

        Raises:
            LocalFileNotFoundError: If the local file does not exist
            UnsupportedFileTypeError: If the extension is not accepted
            TransportError: If the service does not answer 201
        """
        full_path = local_dir / file_name
        if not full_path.is_file():
            raise LocalFileNotFoundError(f"File not found: {full_path}")
        assert_supported_file_type(file_name)
        logger.debug(f"Uploading {full_path} to /{remote}")

        with full_path.open("rb") as stream:
            response = self._transport.send_request(
                self._team_path(),
                RequestMethod.POST,
                params={"directory": remote.query_value()},
                files={"file": (file_name, stream)},
                session_token=self._session_token,
            )
        ApiTransport.assert_status_code(response, 201, "Upload file failed!")
        return _response_url(response)

    def delete_file(self, remote: RemotePath, file_name: str) -> None:
        logger.debug(f"Deleting /{remote.append(file_name)}")
        response = self._transport.send_request(
            self._team_path(file_name),
            RequestMethod.DELETE,
            params={"directory": remote.query_value()},
            session_token=self._session_token,
        )
        ApiTransport.assert_status_code(response, 200, "Delete file failed!")


def _response_url(response: httpx.Response) -> str:
    """The upload endpoint answers with the URL, either bare or JSON-encoded."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        return str(body.get("url") or body.get("Location") or "")
    return str(body)
