"""Recursive directory synchronisation between a local tree and the remote tree.

Fan-out happens one directory level at a time: every file operation and
every subdirectory of a level is submitted to that level's thread pool, and
the level returns only when all of them have finished (join-all). There is no
global cap, so a wide and deep tree keeps several pools busy at once.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, Sequence, TypeVar

from igem_uploader._internal.files import FileHandler
from igem_uploader.exceptions import LocalFileNotFoundError
from igem_uploader.models import FileInfo, FolderInfo, UploadResult
from igem_uploader.path import PathLike, RemotePath, Segment, local_path

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UploadReport:
    """Collects per-file outcomes from concurrent upload workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.results: list[UploadResult] = []
        self.errors: list[tuple[str, str]] = []

    def record_success(self, local_file_path: str, url: str) -> None:
        with self._lock:
            self.results.append(UploadResult(local_file_path, success=True, url=url))

    def record_failure(self, local_file_path: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        with self._lock:
            self.errors.append((local_file_path, message))
            self.results.append(
                UploadResult(local_file_path, success=False, url=None, error=message)
            )

    def log_summary(self) -> None:
        if self.errors:
            details = "\n".join(f"  {path}: {message}" for path, message in self.errors)
            logger.error(f"The following errors occurred during the upload:\n{details}")
        logger.info(
            f"Upload complete with {len(self.errors)} fails "
            f"({len(self.results) - len(self.errors)}/{len(self.results)} succeeded)"
        )


class DirectorySynchronizer:
    """Walks, purges and uploads directory trees through a FileHandler.

    Args:
        files: Remote file operations bound to a team and session
        max_workers: Thread pool size for each directory level
            (None uses the concurrent.futures default)
    """

    def __init__(self, files: FileHandler, max_workers: int | None = None) -> None:
        self.files = files
        self.max_workers = max_workers

    def _join_all(self, tasks: Iterable[Callable[[], T]]) -> list[T]:
        """Run tasks concurrently and return their results in submission order.

        Every task runs to completion even when a sibling fails; the first
        failure in submission order is then re-raised.
        """
        tasks = list(tasks)
        if not tasks:
            return []
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="igem-sync"
        ) as pool:
            futures = [pool.submit(task) for task in tasks]
            wait(futures)
        failed = next((f for f in futures if f.exception() is not None), None)
        if failed is not None:
            raise failed.exception()  # type: ignore[misc]
        return [future.result() for future in futures]

    def list_children(self, remote: PathLike) -> tuple[list[FolderInfo], list[FileInfo]]:
        """Return the immediate subfolders and files of a remote directory."""
        listing = self.files.list_directory(RemotePath.of(remote))
        return listing.folders, listing.files

    def purge(self, remote: PathLike, recursive: bool = False) -> None:
        """Delete every file in a remote directory, and its subtree if recursive.

        Sibling deletes all run even if one of them fails; the failure is then
        raised and the purge does not descend into subdirectories.
        """
        remote = RemotePath.of(remote)
        folders, files = self.list_children(remote)
        logger.info(f"Purging /{remote}: {len(files)} file(s), {len(folders)} folder(s)")

        self._join_all(partial(self.files.delete_file, remote, f.name) for f in files)
        if not recursive:
            return
        self._join_all(
            partial(self.purge, remote.append(folder.name), True) for folder in folders
        )

    def upload_tree(
        self,
        remote: PathLike,
        local: str | os.PathLike[str] | Sequence[Segment],
    ) -> list[UploadResult]:
        """Mirror a local directory onto a remote directory.

        Folders are never created explicitly; the remote side derives them
        from the uploaded keys. Each regular file yields exactly one
        UploadResult, failed or not.

        Raises:
            LocalFileNotFoundError: If the local root is not a directory
        """
        remote = RemotePath.of(remote)
        local = local_path(local)
        if not local.is_dir():
            raise LocalFileNotFoundError(f"Directory not found: {local}")

        report = UploadReport()
        self._upload_level(remote, local, report)
        report.log_summary()
        return report.results

    def _upload_level(self, remote: RemotePath, local: Path, report: UploadReport) -> None:
        tasks: list[Callable[[], None]] = []
        for name in sorted(os.listdir(local)):
            if (local / name).is_dir():
                tasks.append(partial(self._upload_level, remote.append(name), local / name, report))
            else:
                tasks.append(partial(self._upload_one, remote, local, name, report))
        self._join_all(tasks)

    def _upload_one(
        self, remote: RemotePath, local: Path, file_name: str, report: UploadReport
    ) -> None:
        local_file_path = str(local / file_name)
        try:
            url = self.files.upload_file(remote, local, file_name)
        except Exception as e:
            logger.warning(f"Failed to upload {local_file_path}: {e}")
            report.record_failure(local_file_path, e)
            return
        logger.info(f"Uploaded {local_file_path} -> {url}")
        report.record_success(local_file_path, url)
