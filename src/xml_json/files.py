"""File access used by the converter facade.

The codecs never touch storage. The facade reads and writes through a
``FileStore``, so callers can substitute their own (in-memory, remote, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Union

from .errors import FileAccessError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileStore(Protocol):
    """Reads and writes whole files as bytes."""

    def read(self, path: PathLike) -> bytes: ...

    def write(self, path: PathLike, content: bytes) -> None: ...


class LocalFileStore:
    """FileStore backed by the local filesystem."""

    def read(self, path: PathLike) -> bytes:
        file_path = Path(path).expanduser()
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise FileAccessError(f"Cannot read {file_path}: {e.strerror or e}", path=str(file_path)) from e
        logger.debug(f"Read {len(content)} bytes from {file_path}")
        return content

    def write(self, path: PathLike, content: bytes) -> None:
        file_path = Path(path).expanduser()
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        except OSError as e:
            raise FileAccessError(f"Cannot write {file_path}: {e.strerror or e}", path=str(file_path)) from e
        logger.debug(f"Wrote {len(content)} bytes to {file_path}")


__all__ = ["FileStore", "LocalFileStore", "PathLike"]
