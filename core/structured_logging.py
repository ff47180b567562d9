"""Structured logging helpers with package and phase context."""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_PACKAGE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "package", default="-"
)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "phase", default="-"
)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | package=%(package)s | phase=%(phase)s | "
    "%(name)s | %(message)s"
)


class _PackageContextFilter(logging.Filter):
    """Inject package/phase fields into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.package = _PACKAGE_VAR.get("-")
        record.phase = _PHASE_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        has_filter = any(
            isinstance(f, _PackageContextFilter) for f in handler.filters
        )
        if not has_filter:
            handler.addFilter(_PackageContextFilter())


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Configure root logging format with package/phase context."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _ensure_filter_on_root_handlers()


def get_package() -> str:
    """Get the package currently being analysed."""
    return _PACKAGE_VAR.get("-")


def get_phase() -> str:
    """Get the current pipeline phase."""
    return _PHASE_VAR.get("-")


@contextmanager
def package_scope(package: str) -> Iterator[None]:
    """Temporarily set package context for emitted logs."""
    token = _PACKAGE_VAR.set(package or "-")
    try:
        yield
    finally:
        _PACKAGE_VAR.reset(token)


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    """Temporarily set phase context for emitted logs."""
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)
