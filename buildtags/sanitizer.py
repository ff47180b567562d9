"""
Source scrubbing applied before parsing.

Lines starting with a ``//line `` positional-redirect comment are replaced by
blanks so they never reach the parser. The check is purely textual: a marker
inside a string or a ``/*`` comment that happens to sit at the start of a line
is blanked too. A proper check would need a full Go scan, which is not worth
its cost here.
"""

import logging

from buildtags.config import LINE_DIRECTIVE_PREFIX

logger = logging.getLogger(__name__)

_NEWLINE = ord("\n")
_SPACE = ord(" ")


def replace_line_prefix_comments(buf: bytearray) -> int:
    """Blank out every line starting with ``//line `` in place.

    Args:
        buf: Mutable source buffer. Its length is never changed.

    Returns:
        Number of lines blanked.
    """
    blanked = 0
    pos = 0
    end = len(buf)
    while True:
        i = buf.find(LINE_DIRECTIVE_PREFIX, pos)
        if i < 0:
            break
        if i == 0 or buf[i - 1] == _NEWLINE:
            while i < end and buf[i] != _NEWLINE:
                buf[i] = _SPACE
                i += 1
            blanked += 1
        else:
            i += len(LINE_DIRECTIVE_PREFIX)
        pos = i
    return blanked


def sanitize_source(source: bytes) -> bytes:
    """Return a copy of ``source`` with ``//line `` lines blanked.

    Raises:
        TypeError: If source is not bytes.
    """
    if not isinstance(source, (bytes, bytearray)):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    buf = bytearray(source)
    blanked = replace_line_prefix_comments(buf)
    if blanked:
        logger.debug("Blanked %d //line comment(s)", blanked)
    return bytes(buf)
