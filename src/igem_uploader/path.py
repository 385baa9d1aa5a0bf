"""Path normalisation shared by every remote and local operation.

A path may be given either as a ``/``-delimited string or as a sequence of
segments (strings or numbers). Both forms normalise to the same canonical
tuple of non-empty, whitespace-trimmed segments.

``..`` and ``.`` are not resolved; they are kept as literal segments and sent
to the service as-is.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from igem_uploader.exceptions import PathTypeError

DELIMITER = "/"

Segment = Union[str, int, float]
PathLike = Union[str, Sequence[Segment], "RemotePath"]


def _is_segment_list(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _segment_str(segment: Segment) -> str:
    # whole-number floats print like integers: 1.0 -> "1"
    if isinstance(segment, float) and segment.is_integer():
        return str(int(segment))
    return str(segment)


def to_segments(value: PathLike) -> list[str]:
    """Split a string on the delimiter; coerce list elements to strings.

    No trimming or filtering happens here.
    """
    if isinstance(value, RemotePath):
        return list(value.segments)
    if isinstance(value, str):
        return value.split(DELIMITER)
    if _is_segment_list(value):
        return [_segment_str(segment) for segment in value]
    raise PathTypeError(f"Invalid path type: {type(value).__name__}")


def to_joined_string(value: PathLike) -> str:
    """Join a segment list with the delimiter; strings are returned unchanged."""
    if isinstance(value, str):
        return value
    return DELIMITER.join(to_segments(value))


def sanitize(value: PathLike) -> list[str]:
    """Return the canonical segment list for ``value``.

    Raises:
        PathTypeError: If value is neither a string nor a segment list
    """
    if isinstance(value, RemotePath):
        return list(value.segments)
    if not isinstance(value, str) and not _is_segment_list(value):
        raise PathTypeError(f"Invalid path type: {type(value).__name__}")
    stripped = (segment.strip() for segment in to_segments(value))
    return [segment for segment in stripped if segment]


def append(base: PathLike, suffix: PathLike) -> RemotePath:
    """Return a new canonical path with ``suffix`` appended to ``base``."""
    return RemotePath(tuple(sanitize(base) + sanitize(suffix)))


def is_empty(value: PathLike) -> bool:
    """True if the path is the root (no segments left after sanitising)."""
    return not sanitize(value)


def local_path(value: str | os.PathLike[str] | Sequence[Segment]) -> Path:
    """Convert a local path argument into a ``pathlib.Path``.

    Segment lists are joined without sanitising so that a leading empty
    segment keeps an absolute path absolute.
    """
    if isinstance(value, (str, os.PathLike)):
        return Path(value)
    if _is_segment_list(value):
        return Path(to_joined_string(value))
    raise PathTypeError(f"Invalid local path type: {type(value).__name__}")


@dataclass(frozen=True)
class RemotePath:
    """Canonical, immutable location in the remote tree."""

    segments: tuple[str, ...] = ()

    @classmethod
    def of(cls, value: PathLike) -> RemotePath:
        if isinstance(value, RemotePath):
            return value
        return cls(tuple(sanitize(value)))

    def append(self, suffix: PathLike) -> RemotePath:
        return append(self, suffix)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ""

    def joined(self) -> str:
        return DELIMITER.join(self.segments)

    def query_value(self) -> str | None:
        """Value of the ``directory`` query parameter; None for the root."""
        return None if self.is_root else self.joined()

    def __str__(self) -> str:
        return self.joined()
