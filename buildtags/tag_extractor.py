"""
Build constraint extraction from parsed Go files.

A comment line containing ``+build`` is a directive. Its trailing text is split
into fields and every field that names an allowed tag is collected. The
directive is not evaluated as a boolean expression: ``linux,amd64`` and
``!windows`` are plain fields that only match if listed verbatim among the
allowed tags.
"""

import logging
import re
from typing import Iterator, List, Sequence, Tuple

from tree_sitter import Node

from buildtags.config import BUILD_DIRECTIVE_MARKER, COMMENT_NODE
from buildtags.models import GoSourceFile

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"""'([^']*)'|"([^"]*)"|(\S+)""")


def split_tag_fields(text: str) -> List[str]:
    """Split directive text into whitespace-separated fields.

    Single- or double-quoted fields are kept whole with the quotes removed.

    Example:
        >>> split_tag_fields('xtag2 xtag3 "a b"')
        ['xtag2', 'xtag3', 'a b']
    """
    fields = []
    for match in _FIELD_RE.finditer(text):
        single, double, bare = match.groups()
        if single is not None:
            fields.append(single)
        elif double is not None:
            fields.append(double)
        else:
            fields.append(bare)
    return fields


def iter_comment_nodes(node: Node) -> Iterator[Node]:
    """Yield every comment node below ``node`` in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == COMMENT_NODE:
            yield current
            continue
        stack.extend(reversed(current.children))


def iter_directive_fields(comment_text: str) -> Iterator[List[str]]:
    """Yield the fields of each ``+build`` line within one comment."""
    for line in comment_text.splitlines():
        idx = line.find(BUILD_DIRECTIVE_MARKER)
        if idx < 0:
            continue
        yield split_tag_fields(line[idx + len(BUILD_DIRECTIVE_MARKER):])


def find_build_tags(
    source_file: GoSourceFile,
    allowed_tags: Sequence[str],
) -> Tuple[List[str], bool]:
    """Collect the allowed tags mentioned by a file's build directives.

    Args:
        source_file: The parsed file to scan.
        allowed_tags: Tags active in the current build configuration.

    Returns:
        A tuple ``(tags, found)`` where tags are in order of first appearance,
        without duplicates, and found is True when tags is non-empty.
    """
    allowed = set(allowed_tags)
    tags: List[str] = []
    for comment in iter_comment_nodes(source_file.tree.root_node):
        text = source_file.node_text(comment)
        for fields in iter_directive_fields(text):
            for field in fields:
                if field in allowed and field not in tags:
                    tags.append(field)

    if tags:
        logger.debug("Build tags %s found in %s", tags, source_file.path)
    return tags, bool(tags)
