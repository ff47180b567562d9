"""
Loading of Go files through a filesystem capability.

A file is read, scrubbed of ``//line`` comments and parsed. Read and parse
failures are both reported as ``ReadOrParseError``; there are no partial
results.
"""

import logging
import posixpath
from typing import Dict, Iterable

from buildtags.models import GoSourceFile, ReadOrParseError
from buildtags.parser import count_error_nodes, first_error_line, parse_bytes
from buildtags.sanitizer import sanitize_source
from buildtags.vfs import FileSystem

logger = logging.getLogger(__name__)


class SourceLoader:
    """Reads and parses Go files from a ``FileSystem``."""

    def __init__(self, fs: FileSystem):
        self.fs = fs

    def parse_file(self, path: str) -> GoSourceFile:
        """Read, sanitize and parse a single Go file.

        Args:
            path: Slash-separated path inside the filesystem.

        Returns:
            The parsed file.

        Raises:
            ReadOrParseError: If the file cannot be read, is not valid UTF-8
                or has syntax errors.
        """
        try:
            raw = self.fs.read_file(path)
        except FileNotFoundError as e:
            logger.error("File not found: %s", path)
            raise ReadOrParseError(f"File not found: {path}", path=path) from e
        except OSError as e:
            logger.error("Error reading file %s: %s", path, e)
            raise ReadOrParseError(f"Error reading file {path}: {e}", path=path) from e

        source = sanitize_source(raw)
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error("File %s is not valid UTF-8: %s", path, e)
            raise ReadOrParseError(
                f"{path}: invalid UTF-8 encoding at byte {e.start}",
                path=path,
            ) from e

        tree = parse_bytes(source)

        if tree.root_node.has_error:
            errors = count_error_nodes(tree)
            line = first_error_line(tree)
            logger.error(
                "File %s contains syntax errors (%d error nodes, first at line %d)",
                path,
                errors,
                line,
            )
            raise ReadOrParseError(
                f"{path}:{line}: syntax error ({errors} error nodes)",
                path=path,
            )

        logger.debug("Successfully parsed file: %s", path)
        return GoSourceFile(path=path, tree=tree, source=source)

    def parse_files(
        self,
        relpath: str,
        abspath: str,
        file_names: Iterable[str],
    ) -> Dict[str, GoSourceFile]:
        """Parse a list of files from one package directory.

        Args:
            relpath: Package path used to build the result keys.
            abspath: Directory the files are read from.
            file_names: Base names of the files to parse.

        Returns:
            Mapping of ``relpath/name`` to the parsed file, in input order.

        Raises:
            ReadOrParseError: On the first file that fails. Files parsed
                before it are discarded.
        """
        files: Dict[str, GoSourceFile] = {}
        for name in file_names:
            parsed = self.parse_file(posixpath.join(abspath, name))
            files[posixpath.join(relpath, name)] = parsed

        logger.info("Parsed %d file(s) from %s", len(files), abspath)
        return files
