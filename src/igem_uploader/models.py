"""Data models for the igem_uploader library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FileType(str, Enum):
    """File types accepted by the iGEM file server."""

    FOLDER = "Folder"
    PNG = "png"
    JPG = "jpg"
    SVG = "svg"
    WEBP = "webp"
    WOFF2 = "woff2"


@dataclass(frozen=True)
class FolderInfo:
    """A folder (common key prefix) in the remote tree."""

    key: str
    name: str
    prefix: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> FolderInfo:
        return cls(
            key=data.get("Key", ""),
            name=data.get("Name", ""),
            prefix=data.get("Prefix", ""),
        )


@dataclass(frozen=True)
class FileInfo:
    """A file object in the remote tree."""

    key: str
    name: str
    size: int = 0
    last_modified: str | None = None
    etag: str | None = None
    url: str | None = None
    type: str | None = None
    storage_class: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> FileInfo:
        return cls(
            key=data.get("Key", ""),
            name=data.get("Name", ""),
            size=int(data.get("Size") or 0),
            last_modified=data.get("LastModified"),
            etag=data.get("ETag"),
            url=data.get("Location"),
            type=data.get("Type"),
            storage_class=data.get("StorageClass"),
        )


@dataclass(frozen=True)
class DirectoryListing:
    """Immediate children of a remote directory."""

    folders: list[FolderInfo] = field(default_factory=list)
    files: list[FileInfo] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DirectoryListing:
        """Build a listing from the raw S3-style response body.

        The service returns subfolders as CommonPrefixes and files as
        Contents; either key is missing when there is nothing to report.
        """
        return cls(
            folders=[FolderInfo.from_api(item) for item in data.get("CommonPrefixes") or []],
            files=[FileInfo.from_api(item) for item in data.get("Contents") or []],
        )


@dataclass(frozen=True)
class UploadResult:
    """Outcome of uploading one local file during a directory upload."""

    local_file_path: str
    success: bool
    url: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class UserInfo:
    """Profile of the signed-in user."""

    id: int
    username: str
    uuid: str | None = None
    public_name: str | None = None
    first_name: str | None = None
    photo_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> UserInfo:
        return cls(
            id=int(data.get("id") or 0),
            username=data.get("username", ""),
            uuid=data.get("uuid"),
            public_name=data.get("publicName"),
            first_name=data.get("firstName"),
            photo_url=data.get("photoURL"),
        )
