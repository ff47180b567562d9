"""
Build-tag identifier mapping for Go packages.

Tree-sitter-based loader and walker that finds which top-level declarations of
a package are only defined under which build tags.

Entry points configure logging once before mapping a package:

    >>> import logging
    >>> from core.structured_logging import configure_structured_logging
    >>> configure_structured_logging(logging.INFO)
    >>> fs = OSFileSystem("/path/to/goroot")
    >>> files = parse_files(fs, "pkg/bar", "/src/bar", ["bar.go", "bar_linux.go"])
    >>> tag_map = map_identifiers_to_tags(fs, files, "pkg/bar", "/src/bar", ["linux"])
"""

from typing import Dict, Iterable, Mapping, Sequence

from buildtags.models import GoSourceFile, ReadOrParseError, make_declaration_key
from buildtags.sanitizer import replace_line_prefix_comments, sanitize_source
from buildtags.vfs import FileSystem, MapFileSystem, OSFileSystem
from buildtags.parser import create_parser, parse_bytes, count_error_nodes
from buildtags.loader import SourceLoader
from buildtags.tag_extractor import find_build_tags, split_tag_fields
from buildtags.traversal import get_receiver_type, iter_declaration_keys
from buildtags.mapper import group_files_by_tag, map_identifiers_to_build_tags


def parse_files(
    fs: FileSystem,
    relpath: str,
    abspath: str,
    file_names: Iterable[str],
) -> Dict[str, GoSourceFile]:
    """Parse the named files of one package directory from ``fs``."""
    return SourceLoader(fs).parse_files(relpath, abspath, file_names)


def map_identifiers_to_tags(
    fs: FileSystem,
    files: Mapping[str, GoSourceFile],
    relpath: str,
    abspath: str,
    allowed_tags: Sequence[str],
) -> Dict[str, str]:
    """Map the package's identifiers to the build tags they are defined under."""
    return map_identifiers_to_build_tags(
        SourceLoader(fs), files, relpath, abspath, allowed_tags
    )


__all__ = [
    # Data models
    "GoSourceFile",
    "ReadOrParseError",
    "make_declaration_key",
    # Capabilities
    "FileSystem",
    "MapFileSystem",
    "OSFileSystem",
    "create_parser",
    "parse_bytes",
    "count_error_nodes",
    # Pipeline stages
    "replace_line_prefix_comments",
    "sanitize_source",
    "SourceLoader",
    "find_build_tags",
    "split_tag_fields",
    "get_receiver_type",
    "iter_declaration_keys",
    "group_files_by_tag",
    "map_identifiers_to_build_tags",
    # Public operations
    "parse_files",
    "map_identifiers_to_tags",
]
