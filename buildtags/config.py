"""
Configuration constants for Go build-tag extraction.

Defines the directive markers and the tree-sitter node type strings used when
walking Go syntax trees.
"""

from typing import Set

# Positional-redirect comments blanked before parsing
LINE_DIRECTIVE_PREFIX: bytes = b"//line "

# Substring identifying a build constraint comment line
BUILD_DIRECTIVE_MARKER: str = "+build"

# Root node of a parsed Go file
SOURCE_FILE_NODE: str = "source_file"

# Comment node type (includes // and /* */)
COMMENT_NODE: str = "comment"

# Top-level declaration node types
FUNCTION_DECLARATION: str = "function_declaration"
METHOD_DECLARATION: str = "method_declaration"
TYPE_DECLARATION: str = "type_declaration"
CONST_DECLARATION: str = "const_declaration"
VAR_DECLARATION: str = "var_declaration"

# Spec node types inside a type declaration
TYPE_SPEC_TYPES: Set[str] = {
    "type_spec",
    "type_alias",
}

# Spec node types inside a const/var declaration
VALUE_SPEC_TYPES: Set[str] = {
    "const_spec",
    "var_spec",
}

# Parenthesized spec groups, e.g. var ( ... ), on newer grammar versions
SPEC_LIST_SUFFIX: str = "_spec_list"

# Receiver parameter node inside a method's receiver list
PARAMETER_DECLARATION: str = "parameter_declaration"

# Separator between tags in a rendered annotation
TAG_SEPARATOR: str = ", "
