"""
Filesystem capabilities the loader reads Go sources through.

Paths are slash-separated and rooted at ``/`` regardless of platform, so a
package can be addressed the same way on disk and in memory.
"""

import logging
import os
import posixpath
from typing import Dict, Mapping, Protocol, Union

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Read-only source of file contents."""

    def read_file(self, path: str) -> bytes:
        """Return the bytes of ``path``.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        ...


def _clean(path: str) -> str:
    """Normalize ``path`` into a rooted, slash-separated form."""
    return posixpath.normpath("/" + path.lstrip("/"))


class OSFileSystem:
    """Serves files below a real directory."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _resolve(self, path: str) -> str:
        clean = _clean(path)
        full = os.path.normpath(os.path.join(self.root, *clean.split("/")[1:]))
        if full != self.root and not full.startswith(self.root + os.sep):
            raise FileNotFoundError(f"Path escapes filesystem root: {path}")
        return full

    def read_file(self, path: str) -> bytes:
        full = self._resolve(path)
        with open(full, "rb") as f:
            return f.read()

    def __repr__(self) -> str:
        return f"OSFileSystem({self.root!r})"


class MapFileSystem:
    """Serves files from an in-memory mapping.

    Keys are paths without a leading slash, e.g. ``"src/bar.go"``. String
    values are encoded as UTF-8.
    """

    def __init__(self, files: Mapping[str, Union[str, bytes]]):
        self._files: Dict[str, bytes] = {}
        for name, content in files.items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            self._files[_clean(name)] = bytes(content)

    def read_file(self, path: str) -> bytes:
        clean = _clean(path)
        try:
            return self._files[clean]
        except KeyError:
            raise FileNotFoundError(f"File not found: {path}") from None
