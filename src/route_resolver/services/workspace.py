"""File-system and cancellation collaborators used during resolution."""

import os
import threading
from collections.abc import Mapping
from pathlib import Path

from route_resolver.logging import get_logger

logger = get_logger(__name__)


class ResolutionCancelled(Exception):
    """Raised when the host cancels a request before a file-system probe."""


class CancellationToken:
    """Advisory cancellation flag a host can set from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ResolutionCancelled()


class FileSystem:
    """
    Local file-system oracle.

    Every query treats I/O errors as absence: a file that cannot be read
    or stat-ed is reported the same as a missing one.
    """

    def is_file(self, path: str) -> bool:
        return Path(path).is_file()

    def mtime(self, path: str) -> int | None:
        """Modification time in nanoseconds, or None if the file is absent."""
        try:
            return os.stat(path).st_mtime_ns
        except OSError:
            return None

    def size(self, path: str) -> int | None:
        try:
            return os.stat(path).st_size
        except OSError:
            return None

    def read_text(self, path: str) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("file_read_failed", path=path, error=str(e))
            return None


class OverlayFileSystem(FileSystem):
    """
    File system that prefers the text of buffers already open in the editor.

    Open buffers may be newer (or staler) than what is on disk; their text
    wins for reads, while existence and timestamps still come from disk.
    """

    def __init__(self, open_documents: Mapping[str, str] | None = None) -> None:
        self._documents = {
            os.path.normpath(path): text for path, text in (open_documents or {}).items()
        }

    def is_file(self, path: str) -> bool:
        return os.path.normpath(path) in self._documents or super().is_file(path)

    def size(self, path: str) -> int | None:
        text = self._documents.get(os.path.normpath(path))
        if text is not None:
            return len(text.encode("utf-8"))
        return super().size(path)

    def read_text(self, path: str) -> str | None:
        text = self._documents.get(os.path.normpath(path))
        if text is not None:
            return text
        return super().read_text(path)
