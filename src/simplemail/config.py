"""Configuration loading for simplemail.

Settings live in a YAML file named ``simplemail.conf.yml``, resolved in
this order:

1. The explicit ``path`` argument
2. The ``SIMPLEMAIL_CONFIG`` environment variable
3. ``simplemail.conf.yml`` in the current directory

When no file is found, the built-in defaults apply. The loaded data is
exposed as a :class:`box.Box` for attribute access.

Example ``simplemail.conf.yml``::

    mail:
      charset: utf-8
      headers:
        X-Mailer: simplemail
      transport:
        ses:
          region: eu-west-3
          timeout: 30
    logging:
      level: INFO
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from box import Box

from simplemail.exceptions import ConfigFileNotFoundError, ConfigFormatError

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_CHARSET",
    "DEFAULT_SES_REGION",
    "DEFAULT_SES_TIMEOUT",
    "HARD_MAX_SES_TIMEOUT",
    "MailSettings",
    "clear_config",
    "get_config",
    "get_mail_settings",
    "load_config",
]

log = logging.getLogger(__name__)

#: Default configuration file name.
CONFIG_FILENAME = "simplemail.conf.yml"

#: Environment variable pointing to a configuration file.
CONFIG_ENV_VAR = "SIMPLEMAIL_CONFIG"

DEFAULT_CHARSET = "utf-8"
DEFAULT_SES_REGION = "eu-west-3"
DEFAULT_SES_TIMEOUT = 30.0

#: Upper bound applied to configured transport timeouts.
HARD_MAX_SES_TIMEOUT = 300.0

_cache: Box | None = None


def _resolve_path(path: str | os.PathLike[str] | None) -> Path | None:
    if path is not None:
        candidate = Path(path)
        if not candidate.is_file():
            raise ConfigFileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        if not candidate.is_file():
            raise ConfigFileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {candidate}")
        return candidate

    candidate = Path.cwd() / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: str | os.PathLike[str] | None = None) -> Box:
    """Load the configuration file.

    Args:
        path: Explicit file path. When omitted, the environment variable
            and the current directory are searched.

    Returns:
        Configuration as a :class:`Box` (empty when no file is found).

    Raises:
        ConfigFileNotFoundError: If an explicitly requested file is missing.
        ConfigFormatError: If the file is not valid YAML or not a mapping.
    """
    resolved = _resolve_path(path)
    if resolved is None:
        log.debug("No %s found, using defaults", CONFIG_FILENAME)
        return Box()

    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigFormatError(f"Invalid YAML in {resolved}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigFormatError(f"Config root must be a mapping in {resolved}, got {type(data).__name__}")
    log.debug("Loaded config from %s", resolved)
    return Box(data)


def get_config(*, force_reload: bool = False) -> Box:
    """Return the process-wide configuration, loading it on first use."""
    global _cache  # noqa: PLW0603  # pylint: disable=global-statement
    if _cache is None or force_reload:
        _cache = load_config()
    return _cache


def clear_config() -> None:
    """Drop the cached configuration."""
    global _cache  # noqa: PLW0603  # pylint: disable=global-statement
    _cache = None


@dataclass(frozen=True, slots=True)
class MailSettings:
    """Resolved ``mail`` section of the configuration.

    Attributes:
        charset: Charset of rendered text parts.
        headers: Extra headers added to rendered messages.
        ses_region: AWS region for :class:`SesTransport`.
        ses_timeout: Boto3 timeout in seconds for :class:`SesTransport`.
    """

    charset: str = DEFAULT_CHARSET
    headers: dict[str, str] = field(default_factory=dict)
    ses_region: str = DEFAULT_SES_REGION
    ses_timeout: float = DEFAULT_SES_TIMEOUT


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        log.warning("Invalid SES timeout %r, using default %.1fs", value, DEFAULT_SES_TIMEOUT)
        return DEFAULT_SES_TIMEOUT
    if not math.isfinite(timeout):
        log.warning("Non-finite SES timeout %r, using default %.1fs", value, DEFAULT_SES_TIMEOUT)
        return DEFAULT_SES_TIMEOUT
    if timeout <= 0:
        return DEFAULT_SES_TIMEOUT
    return min(timeout, HARD_MAX_SES_TIMEOUT)


def _section(parent: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    value = parent.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigFormatError(f"{path} must be a mapping, got {type(value).__name__}")
    return value


def get_mail_settings(config: Mapping[str, Any] | None = None) -> MailSettings:
    """Read mail settings from *config*.

    Args:
        config: Configuration mapping. ``None`` uses :func:`get_config`.

    Returns:
        Settings with defaults filled in. Timeouts are clamped to
        ``HARD_MAX_SES_TIMEOUT``; non-positive, non-finite or invalid ones
        fall back to the default.

    Raises:
        ConfigFormatError: If ``mail``, ``mail.transport``,
            ``mail.transport.ses`` or ``mail.headers`` is not a mapping.

    Examples:
        >>> get_mail_settings({}).charset
        'utf-8'
        >>> get_mail_settings({"mail": {"transport": {"ses": {"timeout": 900}}}}).ses_timeout
        300.0
    """
    if config is None:
        config = get_config()

    mail = _section(config, "mail", "mail")
    ses = _section(_section(mail, "transport", "mail.transport"), "ses", "mail.transport.ses")
    headers = _section(mail, "headers", "mail.headers")

    return MailSettings(
        charset=str(mail.get("charset") or DEFAULT_CHARSET),
        headers={str(name): str(value) for name, value in headers.items()},
        ses_region=str(ses.get("region") or DEFAULT_SES_REGION),
        ses_timeout=_parse_timeout(ses.get("timeout", DEFAULT_SES_TIMEOUT)),
    )
