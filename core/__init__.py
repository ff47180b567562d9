"""Core shared configuration and logging utilities."""

from core.structured_logging import (
    configure_structured_logging,
    get_package,
    get_phase,
    package_scope,
    phase_scope,
)
from core.build_config import (
    BuildConfig,
    ConfigValidationError,
    build_config_from_dict,
    load_build_config,
    parse_tag_list,
    resolve_build_tags,
    resolve_strict_config_validation,
)

__all__ = [
    "configure_structured_logging",
    "get_package",
    "get_phase",
    "package_scope",
    "phase_scope",
    "BuildConfig",
    "ConfigValidationError",
    "build_config_from_dict",
    "load_build_config",
    "parse_tag_list",
    "resolve_build_tags",
    "resolve_strict_config_validation",
]
