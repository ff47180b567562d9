"""
Tree-sitter parser initialization and Go source parsing utilities.

This module provides the parser capability used by the loader: it turns the
bytes of one Go file into a syntax tree. Comments are kept in the tree as
extra nodes, so build directives remain reachable after parsing.
"""

import logging

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# Module-level language constant
GO_LANGUAGE = Language(tsgo.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Go.

    Returns:
        A Parser instance configured with the Go language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"package main")
    """
    parser = Parser(GO_LANGUAGE)
    logger.debug("Created tree-sitter Go parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Go source code.

    Args:
        source: UTF-8 encoded bytes of Go source code.

    Returns:
        A Tree object representing the parsed AST. Syntax errors do not raise;
        callers inspect ``tree.root_node.has_error``.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"package main\\nfunc main() {}\\n")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug("Parsed %d bytes of Go code", len(source))
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a tree."""
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def first_error_line(tree: Tree) -> int:
    """Return the 1-indexed line of the first ERROR or MISSING node, or 0."""
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node.start_point.row + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return 0
