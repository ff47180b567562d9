"""Build configuration loading.

Resolves the set of build tags treated as active for an analysis pass, from a
YAML file and an environment override.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

BUILD_TAGS_ENV = "BUILD_TAGS"

_TAG_SPLIT_RE = re.compile(r"[,\s]+")


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class BuildConfig:
    """Active build configuration for one analysis pass."""

    build_tags: tuple[str, ...] = ()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def parse_tag_list(raw: str) -> tuple[str, ...]:
    """Split a comma or space separated tag list, keeping first occurrences."""
    tags: list[str] = []
    for tag in _TAG_SPLIT_RE.split(raw.strip()):
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def _fail(msg: str, strict: bool) -> BuildConfig:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; continuing with no build tags", msg)
    return BuildConfig()


def build_config_from_dict(payload: Any, strict: bool = False) -> BuildConfig:
    """Validate a parsed config payload into a ``BuildConfig``."""
    if payload is None:
        return _fail("Build config is empty", strict)

    if not isinstance(payload, dict):
        return _fail(
            f"Unexpected build config payload type: {type(payload).__name__}",
            strict,
        )

    raw_tags = payload.get("build_tags", [])
    if raw_tags is None:
        return BuildConfig()
    if isinstance(raw_tags, str):
        return BuildConfig(build_tags=parse_tag_list(raw_tags))
    if not isinstance(raw_tags, list):
        return _fail("'build_tags' must be a list or a string", strict)

    tags: list[str] = []
    for item in raw_tags:
        if not isinstance(item, str) or not item.strip():
            return _fail(f"Invalid build tag entry: {item!r}", strict)
        tag = item.strip()
        if tag not in tags:
            tags.append(tag)
    return BuildConfig(build_tags=tuple(tags))


def load_build_config(config_path: str, strict: bool = False) -> BuildConfig:
    """Load a build configuration from a YAML file.

    In non-strict mode read/parse failures yield an empty configuration.
    In strict mode they raise ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Build config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with no build tags", msg)
        return BuildConfig()
    except yaml.YAMLError as exc:
        msg = f"Failed to parse build config YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with no build tags", msg)
        return BuildConfig()

    config = build_config_from_dict(payload, strict=strict)
    logger.info(
        "Loaded %d build tag(s) from %s", len(config.build_tags), config_path
    )
    return config


def resolve_build_tags(
    config: Optional[BuildConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    env_var: str = BUILD_TAGS_ENV,
) -> tuple[str, ...]:
    """Resolve the active tags; ``env_var`` overrides the configured tags."""
    environ = os.environ if env is None else env
    raw = environ.get(env_var)
    if raw is not None:
        return parse_tag_list(raw)
    if config is None:
        return ()
    return config.build_tags
