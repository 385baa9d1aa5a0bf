"""Main IgemClient class for managing a team's iGEM website files."""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

import httpx

from igem_uploader._internal.auth import AuthHandler
from igem_uploader._internal.files import FileHandler
from igem_uploader._internal.transport import ApiTransport
from igem_uploader.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from igem_uploader.exceptions import SessionError
from igem_uploader.models import DirectoryListing, UploadResult, UserInfo
from igem_uploader.path import PathLike, RemotePath, Segment, local_path
from igem_uploader.sync import DirectorySynchronizer

logger = logging.getLogger(__name__)


class IgemClient:
    """Client for the iGEM upload tool API.

    Supports both context manager and manual session patterns. Remote paths
    may be given as ``"wiki/images"`` or ``["wiki", "images"]``; the team's
    root is ``""`` or ``[]``.

    Example (context manager - recommended):
        with IgemClient(5115, "user", "password") as client:
            client.upload_directory("wiki", "./build")

    Example (manual session):
        client = IgemClient(5115, "user", "password")
        client.start_session()
        client.purge_directory("wiki/old", recursive=True)
        client.end_session()
        client.close()
    """

    def __init__(
        self,
        team_id: int,
        username: str,
        password: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client. No request is sent until start_session().

        Args:
            team_id: Numeric iGEM team id that owns the website
            username: Account username
            password: Account password
            api_url: Base URL of the API
            timeout: Per-request timeout in seconds
            max_workers: Thread pool size per directory level for
                upload_directory and purge_directory
            transport: Optional httpx transport (used for testing)
        """
        self.team_id = team_id
        self._username = username
        self._password = password
        self._max_workers = max_workers
        self._transport = ApiTransport(api_url, timeout, transport=transport)
        self._auth = AuthHandler(self._transport)
        self._session_token: str | None = None
        self._user: UserInfo | None = None

    def __enter__(self) -> IgemClient:
        """Enter context manager, starting a session if none is active.

        The HTTP client is closed if the session cannot be started.
        """
        if not self.is_authenticated:
            try:
                self.start_session()
            except BaseException:
                self.close()
                raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        try:
            if self.is_authenticated:
                self.end_session()
        finally:
            self.close()

    @property
    def is_authenticated(self) -> bool:
        return self._session_token is not None

    @property
    def user(self) -> UserInfo | None:
        """Profile returned by the service when the session was started."""
        return self._user

    def _require_session(self) -> str:
        if self._session_token is None:
            raise SessionError("No started session!")
        return self._session_token

    def _file_handler(self) -> FileHandler:
        return FileHandler(self._transport, self.team_id, self._require_session())

    def _synchronizer(self) -> DirectorySynchronizer:
        return DirectorySynchronizer(self._file_handler(), max_workers=self._max_workers)

    def start_session(self) -> str:
        """Sign in and validate the new session token.

        Returns:
            The session token

        Raises:
            AuthenticationError: If sign-in or validation fails
        """
        token = self._auth.sign_in(self._username, self._password)
        self._user = self._auth.authenticate(token)
        self._session_token = token
        logger.info(f"Session started for team {self.team_id}")
        return token

    def end_session(self) -> None:
        """Sign out. The session token is cleared even if sign-out fails.

        Raises:
            SessionError: If no session is active
        """
        token = self._require_session()
        try:
            self._auth.sign_out(token)
        finally:
            self._session_token = None
            self._user = None

    def list_directory(self, remote_directory: PathLike) -> DirectoryListing:
        """List the folders and files directly inside a remote directory.

        Raises:
            SessionError: If no session is active
            TransportError: If the service does not answer 200
        """
        return self._file_handler().list_directory(RemotePath.of(remote_directory))

    def upload_file(
        self,
        remote_directory: PathLike,
        local_directory: str | os.PathLike[str] | Sequence[Segment],
        file_name: str,
    ) -> str:
        """Upload one file and return its public URL.

        Args:
            remote_directory: Remote directory to upload into
            local_directory: Local directory that contains the file
            file_name: Name of the file inside local_directory

        Raises:
            SessionError: If no session is active
            LocalFileNotFoundError: If the local file does not exist
            UnsupportedFileTypeError: If the extension is not accepted
            TransportError: If the service does not answer 201
        """
        return self._file_handler().upload_file(
            RemotePath.of(remote_directory), local_path(local_directory), file_name
        )

    def delete_file(self, remote_directory: PathLike, file_name: str) -> None:
        """Delete one file from a remote directory."""
        self._file_handler().delete_file(RemotePath.of(remote_directory), file_name)

    def purge_directory(self, remote_directory: PathLike, recursive: bool = False) -> None:
        """Delete every file in a remote directory.

        Args:
            remote_directory: Remote directory to empty
            recursive: Also purge every descendant directory

        Raises:
            SessionError: If no session is active
            TransportError: If any listing or delete fails; the purge stops
        """
        self._synchronizer().purge(remote_directory, recursive)

    def upload_directory(
        self,
        remote_directory: PathLike,
        local_directory: str | os.PathLike[str] | Sequence[Segment],
    ) -> list[UploadResult]:
        """Upload a local directory tree into a remote directory.

        Per-file failures do not stop the upload; they are reported as
        UploadResult entries with success=False.

        Raises:
            SessionError: If no session is active
            LocalFileNotFoundError: If local_directory is not a directory
        """
        return self._synchronizer().upload_tree(remote_directory, local_directory)

    def close(self) -> None:
        """Close the HTTP client. Safe to call more than once."""
        self._transport.close()
