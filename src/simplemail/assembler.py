"""Validation and assembly of builder state into an :class:`AssembledMessage`.

Assembly is a pure transformation: it reads the builder, never mutates it,
performs no I/O, and returns equal results for equal state.

Rules are checked in a fixed order and the first failure is raised:

1. a sender is set (:class:`MissingSenderError`)
2. at least one ``to`` recipient is set (:class:`MissingRecipientError`)
3. a non-empty text or HTML body is set (:class:`MissingBodyError`)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from simplemail.exceptions import MissingBodyError, MissingRecipientError, MissingSenderError
from simplemail.logging import TRACE_LEVEL
from simplemail.models import AlternativeBody, AssembledMessage, HtmlBody, MailBody, PlainTextBody

if TYPE_CHECKING:
    from simplemail.address import EmailAddress
    from simplemail.builder import MailBuilder

__all__ = ["assemble", "compose_body", "validate"]

log = logging.getLogger(__name__)


def validate(builder: MailBuilder) -> None:
    """Check that *builder* holds a complete message.

    Args:
        builder: Builder to inspect.

    Raises:
        MissingSenderError: If no sender is set.
        MissingRecipientError: If no ``to`` recipient is set.
        MissingBodyError: If both bodies are absent or empty.
    """
    if builder.sender_address is None:
        raise MissingSenderError
    if not builder.to_addresses:
        raise MissingRecipientError
    if not builder.text_body and not builder.html_body:
        raise MissingBodyError


def compose_body(text: str | None, html: str | None) -> MailBody:
    """Select the body variant for the given renderings.

    Empty strings count as absent.

    Args:
        text: Plain-text content.
        html: HTML content.

    Returns:
        The body variant.

    Raises:
        MissingBodyError: If both renderings are absent or empty.

    Examples:
        >>> compose_body("hello", None)
        PlainTextBody(content='hello')
        >>> compose_body("", "<p>hi</p>")
        HtmlBody(content='<p>hi</p>')
        >>> compose_body("hello", "<p>hi</p>")
        AlternativeBody(plain='hello', html='<p>hi</p>')
    """
    if text and html:
        return AlternativeBody(plain=text, html=html)
    if text:
        return PlainTextBody(content=text)
    if html:
        return HtmlBody(content=html)
    raise MissingBodyError


def assemble(builder: MailBuilder) -> AssembledMessage:
    """Validate *builder* and return the matching :class:`AssembledMessage`.

    Args:
        builder: Builder holding the accumulated state.

    Returns:
        The assembled message. Subject and recipient sequences are passed
        through unchanged.

    Raises:
        MailValidationError: The first failing completeness rule.
    """
    validate(builder)
    message = AssembledMessage(
        sender=cast("EmailAddress", builder.sender_address),
        to=builder.to_addresses,
        cc=builder.cc_addresses,
        bcc=builder.bcc_addresses,
        subject=builder.subject_text,
        body=compose_body(builder.text_body, builder.html_body),
    )
    if log.isEnabledFor(TRACE_LEVEL):
        log.log(
            TRACE_LEVEL,
            "[ASSEMBLE] %s from %s (to=%d, cc=%d, bcc=%d)",
            type(message.body).__name__,
            message.sender,
            len(message.to),
            len(message.cc),
            len(message.bcc),
        )
    return message
