"""
Data models shared by the loading, extraction and mapping stages.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from tree_sitter import Tree


class ReadOrParseError(Exception):
    """Raised when a Go file cannot be read or does not parse.

    Attributes:
        path: The file that failed, or the package directory when raised
            from a batch operation.
        file_names: The file batch being processed, empty for single files.
    """

    def __init__(
        self,
        message: str,
        path: str,
        file_names: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.path = path
        self.file_names: Tuple[str, ...] = tuple(file_names)


@dataclass(frozen=True)
class GoSourceFile:
    """A parsed Go file.

    Attributes:
        path: Path the file was read from.
        tree: The tree-sitter syntax tree, comments included.
        source: Sanitized source bytes the tree was built from.
    """

    path: str
    tree: Tree
    source: bytes

    def node_text(self, node) -> str:
        """Return the source text spanned by ``node``."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")


def make_declaration_key(name: str, receiver_type: Optional[str] = None) -> str:
    """Build the lookup key for a declaration.

    Args:
        name: Identifier name.
        receiver_type: Rendered receiver type for methods, or None.

    Returns:
        ``"Receiver.Name"`` for methods, ``"Name"`` otherwise.
    """
    if receiver_type:
        return f"{receiver_type}.{name}"
    return name
