"""Shared pytest fixtures for the simplemail test suite."""

from __future__ import annotations

# Disable Rich colors and force wide terminal BEFORE any imports
# Rich checks these at import time
import os

os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"
os.environ["FORCE_COLOR"] = "0"
os.environ["COLUMNS"] = "200"  # Prevent text wrapping in CLI output

import logging
from collections.abc import Iterator

import pytest

import simplemail.config as _config
import simplemail.logging as _logging
from simplemail import MailBuilder
from simplemail.address import EmailAddress

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    """Keep tests away from any real ``simplemail.conf.yml`` or env override."""
    monkeypatch.delenv(_config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    _config.clear_config()
    yield
    _config.clear_config()


@pytest.fixture
def sender() -> EmailAddress:
    """Return a sender address."""
    return EmailAddress("a@x.com")


@pytest.fixture
def complete_builder() -> MailBuilder:
    """Return a builder that assembles into a plain-text message."""
    return MailBuilder().sender("a@x.com").to("b@x.com").text("hello")


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Detach the handler installed by ``init_logging`` and restore the logger level."""
    logger = logging.getLogger(_logging.ROOT_LOGGER_NAME)
    level = logger.level
    yield
    if _logging._handler is not None:
        logger.removeHandler(_logging._handler)
        _logging._handler = None
    logger.setLevel(level)
