"""Data models produced by message assembly.

This module defines the immutable structures handed to transports:

- PlainTextBody: Body with a plain-text rendering only
- HtmlBody: Body with an HTML rendering only
- AlternativeBody: Body with both renderings, plain first
- MailBody: Union of the three body variants
- AssembledMessage: Frozen, validated message ready for delivery
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simplemail.address import EmailAddress


@dataclass(frozen=True, slots=True)
class PlainTextBody:
    """Single ``text/plain`` body.

    Attributes:
        content: Plain-text content.
    """

    content: str


@dataclass(frozen=True, slots=True)
class HtmlBody:
    """Single ``text/html`` body.

    Attributes:
        content: HTML content.
    """

    content: str


@dataclass(frozen=True, slots=True)
class AlternativeBody:
    """``multipart/alternative`` body offering plain text and HTML.

    The plain part always precedes the HTML part on the wire; clients
    prefer the last part they can display.

    Attributes:
        plain: Plain-text rendering.
        html: HTML rendering.
    """

    plain: str
    html: str


MailBody = PlainTextBody | HtmlBody | AlternativeBody


@dataclass(frozen=True, slots=True)
class AssembledMessage:
    """A validated message ready for a transport.

    Attributes:
        sender: Message sender.
        to: Primary recipients, in insertion order (never empty).
        cc: Carbon-copy recipients, possibly empty.
        bcc: Blind carbon-copy recipients, possibly empty.
        subject: Subject line, ``None`` when never set.
        body: Body variant describing the MIME layout.

    Examples:
        >>> from simplemail.address import EmailAddress
        >>> message = AssembledMessage(
        ...     sender=EmailAddress("a@x.com"),
        ...     to=(EmailAddress("b@x.com"),),
        ...     cc=(),
        ...     bcc=(EmailAddress("c@x.com"),),
        ...     subject=None,
        ...     body=PlainTextBody("hello"),
        ... )
        >>> [str(address) for address in message.envelope_recipients]
        ['b@x.com', 'c@x.com']
    """

    sender: EmailAddress
    to: tuple[EmailAddress, ...]
    cc: tuple[EmailAddress, ...]
    bcc: tuple[EmailAddress, ...]
    subject: str | None
    body: MailBody

    @property
    def header_recipients(self) -> tuple[EmailAddress, ...]:
        """Return the recipients visible in message headers (to, then cc)."""
        return self.to + self.cc

    @property
    def envelope_recipients(self) -> tuple[EmailAddress, ...]:
        """Return every delivery recipient (to, cc, then bcc).

        Duplicates are dropped, keeping the first occurrence. Addresses
        compare with a case-insensitive domain.
        """
        seen: set[str] = set()
        recipients: list[EmailAddress] = []
        for address in self.to + self.cc + self.bcc:
            if address.normalized in seen:
                continue
            seen.add(address.normalized)
            recipients.append(address)
        return tuple(recipients)


__all__ = [
    "AlternativeBody",
    "AssembledMessage",
    "HtmlBody",
    "MailBody",
    "PlainTextBody",
]
