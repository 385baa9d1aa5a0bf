"""iGEM Uploader - A Python library for managing iGEM team website files.

Example usage:
    from igem_uploader import IgemClient

    # Using context manager (recommended)
    with IgemClient(5115, "username", "password") as client:
        results = client.upload_directory("wiki", "./build")
        failed = [r for r in results if not r.success]

    # Manual session management
    client = IgemClient(5115, "username", "password")
    client.start_session()
    client.upload_file(["wiki", "images"], "./assets", "logo.png")
    client.purge_directory("old-wiki", recursive=True)
    client.end_session()
    client.close()
"""

from igem_uploader.client import IgemClient
from igem_uploader.exceptions import (
    AuthenticationError,
    IgemError,
    LocalFileNotFoundError,
    PathTypeError,
    SessionError,
    TransportError,
    UnsupportedFileTypeError,
)
from igem_uploader.models import (
    DirectoryListing,
    FileInfo,
    FileType,
    FolderInfo,
    UploadResult,
    UserInfo,
)
from igem_uploader.path import RemotePath

__version__ = "0.1.0"

__all__ = [
    # Main client
    "IgemClient",
    # Paths
    "RemotePath",
    # Models
    "DirectoryListing",
    "FileInfo",
    "FileType",
    "FolderInfo",
    "UploadResult",
    "UserInfo",
    # Exceptions
    "IgemError",
    "AuthenticationError",
    "LocalFileNotFoundError",
    "PathTypeError",
    "SessionError",
    "TransportError",
    "UnsupportedFileTypeError",
]
