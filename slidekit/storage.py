"""Path-addressable storage used to read and write presentation text.

The codec itself never touches the filesystem.  Callers hand it a
:class:`Storage` implementation; :class:`FileStorage` is the default and
resolves relative paths against a base directory, :class:`MemoryStorage`
keeps everything in a dict (handy for tests and for embedding).

Failures are re-raised as :class:`~slidekit.errors.StorageError`, which
names the operation and the path so the caller can diagnose them.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from .errors import StorageError

logger = logging.getLogger(__name__)


__all__ = ["Storage", "FileStorage", "MemoryStorage"]


class Storage(ABC):
    """Read and write raw bytes by path."""

    @abstractmethod
    def read(self, path: str | Path) -> bytes:
        """Return the bytes stored at *path*.

        Raises
        ------
        StorageError
            If *path* cannot be read.
        """

    @abstractmethod
    def write(self, path: str | Path, data: bytes) -> None:
        """Store *data* at *path*, replacing previous content."""


class FileStorage(Storage):
    """Storage backed by the local filesystem.

    Parameters
    ----------
    base_dir
        Directory that relative paths are resolved against.  Defaults to the
        current working directory at call time.
    """

    def __init__(self, base_dir: Optional[str | Path] = None):
        self.base_dir = Path(base_dir) if base_dir else None

    def resolve(self, path: str | Path) -> Path:
        """Return the absolute path for *path*.

        ``file://`` prefixes are stripped, ``~`` is expanded and relative
        paths are anchored at :attr:`base_dir`.
        """
        raw = str(path)
        if raw.startswith("file://"):
            raw = raw[7:]
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = (self.base_dir or Path.cwd()) / candidate
        return candidate.resolve()

    def read(self, path: str | Path) -> bytes:
        abs_path = self.resolve(path)
        try:
            return abs_path.read_bytes()
        except OSError as exc:
            logger.warning("Could not read %s: %s", abs_path, exc)
            raise StorageError("reading file", abs_path, exc) from exc

    def write(self, path: str | Path, data: bytes) -> None:
        abs_path = self.resolve(path)
        try:
            abs_path.parent.mkdir(parents=True, exist_ok=True)
            abs_path.write_bytes(data)
        except OSError as exc:
            logger.warning("Could not write %s: %s", abs_path, exc)
            raise StorageError("writing file", abs_path, exc) from exc


class MemoryStorage(Storage):
    """Storage that keeps files in memory, keyed by their path string."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})

    def read(self, path: str | Path) -> bytes:
        key = str(path)
        try:
            return self.files[key]
        except KeyError as exc:
            raise StorageError("reading file", key, FileNotFoundError(f"no such file: {key}")) from exc

    def write(self, path: str | Path, data: bytes) -> None:
        self.files[str(path)] = bytes(data)
