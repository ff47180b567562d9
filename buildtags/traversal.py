"""
Top-level declaration walking for parsed Go files.

Produces the declaration keys a file defines: functions, methods (qualified by
their receiver type), types, constants and variables. Only direct children of
the source file are considered; declarations inside function bodies are local.
"""

import logging
import re
from typing import Iterator, List, Optional

from tree_sitter import Node

from buildtags.config import (
    CONST_DECLARATION,
    FUNCTION_DECLARATION,
    METHOD_DECLARATION,
    PARAMETER_DECLARATION,
    SPEC_LIST_SUFFIX,
    TYPE_DECLARATION,
    TYPE_SPEC_TYPES,
    VALUE_SPEC_TYPES,
    VAR_DECLARATION,
)
from buildtags.models import GoSourceFile, make_declaration_key

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s+")
_SPACE_AFTER_OPEN_RE = re.compile(r"([*\[(])\s+")
_SPACE_BEFORE_CLOSE_RE = re.compile(r"\s+([\]),])")
_COMMA_RE = re.compile(r",\s*")


def normalize_type_text(text: str) -> str:
    """Render a type expression's source text in canonical spacing.

    Example:
        >>> normalize_type_text("*  Set[K,V ]")
        '*Set[K, V]'
    """
    normalized = _SPACE_RE.sub(" ", text.strip())
    normalized = _COMMA_RE.sub(", ", normalized)
    normalized = _SPACE_AFTER_OPEN_RE.sub(r"\1", normalized)
    normalized = _SPACE_BEFORE_CLOSE_RE.sub(r"\1", normalized)
    return normalized


def get_receiver_type(source_file: GoSourceFile, node: Node) -> Optional[str]:
    """Render the receiver type of a method declaration.

    Args:
        source_file: File the node belongs to.
        node: A method_declaration node.

    Returns:
        The receiver type text (e.g. ``A`` or ``*A``), or None when the node has
        no receiver or it cannot be rendered. Callers then fall back to the
        unqualified method name.
    """
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return None

    params = [c for c in receiver.named_children if c.type == PARAMETER_DECLARATION]
    if not params:
        logger.debug(
            "Method at line %d has an empty receiver list",
            node.start_point.row + 1,
        )
        return None

    type_node = params[0].child_by_field_name("type")
    if type_node is None:
        return None

    try:
        text = source_file.node_text(type_node)
    except UnicodeDecodeError as e:
        logger.debug(
            "Cannot render receiver at line %d of %s: %s",
            node.start_point.row + 1,
            source_file.path,
            e,
        )
        return None

    rendered = normalize_type_text(text)
    return rendered or None


def _named_identifiers(source_file: GoSourceFile, nodes: List[Node]) -> List[str]:
    return [source_file.node_text(n) for n in nodes if n.is_named]


def _iter_specs(node: Node, spec_types) -> Iterator[Node]:
    """Yield spec children of a declaration, flattening grouped forms."""
    for child in node.named_children:
        if child.type in spec_types:
            yield child
        elif child.type.endswith(SPEC_LIST_SUFFIX):
            yield from _iter_specs(child, spec_types)


def iter_declaration_keys(source_file: GoSourceFile) -> Iterator[str]:
    """Yield the key of every top-level declaration in a file, in file order.

    Args:
        source_file: The parsed file.

    Yields:
        ``Name`` for functions, types, constants and variables and
        ``Receiver.Name`` for methods. A declaration naming several
        identifiers yields one key per identifier.
    """
    for node in source_file.tree.root_node.named_children:
        if node.type == FUNCTION_DECLARATION:
            name = node.child_by_field_name("name")
            if name is not None:
                yield make_declaration_key(source_file.node_text(name))

        elif node.type == METHOD_DECLARATION:
            name = node.child_by_field_name("name")
            if name is not None:
                receiver_type = get_receiver_type(source_file, node)
                yield make_declaration_key(source_file.node_text(name), receiver_type)

        elif node.type == TYPE_DECLARATION:
            for spec in _iter_specs(node, TYPE_SPEC_TYPES):
                name = spec.child_by_field_name("name")
                if name is not None:
                    yield make_declaration_key(source_file.node_text(name))

        elif node.type in (CONST_DECLARATION, VAR_DECLARATION):
            for spec in _iter_specs(node, VALUE_SPEC_TYPES):
                names = spec.children_by_field_name("name")
                for ident in _named_identifiers(source_file, names):
                    yield make_declaration_key(ident)
