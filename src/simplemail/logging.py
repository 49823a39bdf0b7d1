"""Logging helpers for simplemail.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications (and the CLI) call
:func:`init_logging` once to attach a Rich console handler to the
``simplemail`` logger.

A custom ``TRACE`` level (5) sits below ``DEBUG`` and is used for
per-message details such as assembly results and transport requests.

Examples:
    >>> from simplemail.logging import init_logging, get_logger
    >>> init_logging(level="DEBUG")  # doctest: +SKIP
    >>> get_logger("builder").name
    'simplemail.builder'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "ROOT_LOGGER_NAME",
    "TRACE_LEVEL",
    "get_logger",
    "init_logging",
    "parse_level",
]

#: Custom level below DEBUG for per-message details.
TRACE_LEVEL = 5

#: Name of the package root logger.
ROOT_LOGGER_NAME = "simplemail"

logging.addLevelName(TRACE_LEVEL, "TRACE")

_handler: RichHandler | None = None


def parse_level(level: str | int) -> int:
    """Convert a level name or number to a numeric level.

    Args:
        level: Level name (``"TRACE"``, ``"info"``...) or number.

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the level name is unknown.

    Examples:
        >>> parse_level("trace")
        5
        >>> parse_level(logging.INFO)
        20
    """
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name == "TRACE":
        return TRACE_LEVEL
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``simplemail`` namespace.

    Args:
        name: Child name, with or without the ``simplemail.`` prefix.
            ``None`` returns the package root logger.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def init_logging(
    level: str | int | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a Rich console handler to the ``simplemail`` logger.

    Calling it again replaces the level but never stacks handlers.

    Args:
        level: Handler level. Defaults to ``logging.level`` from *config*,
            then ``INFO``.
        config: Configuration mapping (see :func:`simplemail.config.get_config`).
        console: Rich console to write to. Defaults to stderr.

    Returns:
        The configured package root logger.
    """
    global _handler  # noqa: PLW0603  # pylint: disable=global-statement

    if level is None:
        section = (config or {}).get("logging") or {}
        level = section.get("level") or "INFO"
    numeric = parse_level(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is None:
        _handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(_handler)
    elif console is not None:
        _handler.console = console
    _handler.setLevel(numeric)
    logger.setLevel(numeric)
    return logger
