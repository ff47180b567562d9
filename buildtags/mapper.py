"""
Mapping of package identifiers to the build tags they are defined under.

Methods of one type, or functions and variables of one package, can be spread
over files guarded by different build tags. For every tag mentioned by an
allowed directive, the files carrying that tag are parsed again as a group and
each top-level declaration in them is annotated with the tag.
"""

import logging
import posixpath
from typing import Dict, List, Mapping, Sequence

from buildtags.config import TAG_SEPARATOR
from buildtags.loader import SourceLoader
from buildtags.models import GoSourceFile, ReadOrParseError
from buildtags.tag_extractor import find_build_tags
from buildtags.traversal import iter_declaration_keys
from core.structured_logging import package_scope, phase_scope

logger = logging.getLogger(__name__)


def group_files_by_tag(
    files: Mapping[str, GoSourceFile],
    allowed_tags: Sequence[str],
) -> Dict[str, List[str]]:
    """Group file base names by the allowed build tags they mention.

    Files are visited in sorted key order, so the file list of every tag is
    deterministic regardless of the mapping's own order.

    Returns:
        Mapping of tag to deduplicated file base names.
    """
    tag_to_files: Dict[str, List[str]] = {}
    for file_name in sorted(files):
        tags, found = find_build_tags(files[file_name], allowed_tags)
        if not found:
            continue
        base = posixpath.basename(file_name)
        for tag in tags:
            names = tag_to_files.setdefault(tag, [])
            if base not in names:
                names.append(base)
    return tag_to_files


def map_identifiers_to_build_tags(
    loader: SourceLoader,
    files: Mapping[str, GoSourceFile],
    relpath: str,
    abspath: str,
    allowed_tags: Sequence[str],
) -> Dict[str, str]:
    """Map each identifier (type/var/const/func/method) to its build tags.

    Args:
        loader: Loader used to parse every tag's file group again.
        files: Already parsed files of the package, keyed by path.
        relpath: Package path used for result keys of the re-parsed files.
        abspath: Directory the package's files are read from.
        allowed_tags: Tags active in the current build configuration.

    Returns:
        Mapping of declaration key (``Name`` or ``Receiver.Name``) to the
        comma separated, sorted list of tags it is defined under. Empty when no
        file mentions an allowed tag.

    Raises:
        ReadOrParseError: If any file of any tag group fails to load. No
            partial mapping is returned.

    Example:
        >>> tag_map = map_identifiers_to_build_tags(loader, files, "", "/src", ["xtag1"])
        >>> tag_map["A.String"]
        'xtag1'
    """
    with package_scope(relpath or abspath):
        with phase_scope("classify"):
            tag_to_files = group_files_by_tag(files, allowed_tags)

        if not tag_to_files:
            logger.debug("No build-tagged files among %d file(s)", len(files))
            return {}

        logger.info(
            "Found %d build tag(s) across %d file(s)",
            len(tag_to_files),
            len(files),
        )

        tags_by_key: Dict[str, List[str]] = {}
        for tag in sorted(tag_to_files):
            file_names = tag_to_files[tag]
            with phase_scope(f"rescan:{tag}"):
                # Each group is parsed on its own rather than reusing the
                # trees passed in, so the group is self-contained per tag.
                try:
                    group = loader.parse_files(relpath, abspath, file_names)
                except ReadOrParseError as e:
                    raise ReadOrParseError(
                        f"{e} in {abspath!r} with files: {file_names}",
                        path=abspath,
                        file_names=file_names,
                    ) from e

                for source_file in group.values():
                    for key in iter_declaration_keys(source_file):
                        tags = tags_by_key.setdefault(key, [])
                        if tag not in tags:
                            tags.append(tag)

        logger.info("Mapped %d identifier(s) to build tags", len(tags_by_key))
        return {key: TAG_SEPARATOR.join(tags) for key, tags in tags_by_key.items()}
