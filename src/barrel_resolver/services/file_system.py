"""File system capability used by the resolution core."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from barrel_resolver.config import get_settings
from barrel_resolver.core import SourceReadError
from barrel_resolver.logging import get_logger

logger = get_logger(__name__)


class FileSystem(Protocol):
    """
    Minimal file access the core needs from its host.

    ``read_file`` raises SourceReadError when the path is missing or
    unreadable; ``exists`` never raises.
    """

    def read_file(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...


class LocalFileSystem:
    """Reads modules from disk as UTF-8, replacing undecodable bytes."""

    def __init__(self, max_file_size_bytes: int | None = None) -> None:
        self._max_file_size_bytes = (
            max_file_size_bytes
            if max_file_size_bytes is not None
            else get_settings().max_file_size_bytes
        )

    def read_file(self, path: str) -> str:
        file_path = Path(path)
        try:
            size = file_path.stat().st_size
            if size > self._max_file_size_bytes:
                logger.debug(
                    "file_skipped_too_large",
                    path=path,
                    size=size,
                    max_size=self._max_file_size_bytes,
                )
                raise SourceReadError(path, f"file exceeds {self._max_file_size_bytes} bytes")
            raw_content = file_path.read_bytes()
        except SourceReadError:
            raise
        except OSError as e:
            raise SourceReadError(path, e.strerror or str(e)) from e

        return raw_content.decode("utf-8", errors="replace")

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def write_file(self, path: str, content: str) -> None:
        """Write content back to disk (used by batch ``write`` mode)."""
        Path(path).write_text(content, encoding="utf-8")


class InMemoryFileSystem:
    """
    File system backed by a mapping of path to content.

    Paths are normalized on the way in and on lookup, so ``src/./a.ts``
    and ``src/a.ts`` name the same file.
    """

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        for path, content in (files or {}).items():
            self.add_file(path, content)

    def add_file(self, path: str, content: str) -> None:
        self._files[os.path.normpath(path)] = content

    def read_file(self, path: str) -> str:
        try:
            return self._files[os.path.normpath(path)]
        except KeyError:
            raise SourceReadError(path, "no such file") from None

    def exists(self, path: str) -> bool:
        return os.path.normpath(path) in self._files

    @property
    def paths(self) -> list[str]:
        return sorted(self._files)
