"""Render an :class:`AssembledMessage` as a MIME :class:`EmailMessage`.

The body variant decides the structure:

- :class:`PlainTextBody` -> single ``text/plain`` part
- :class:`HtmlBody` -> single ``text/html`` part
- :class:`AlternativeBody` -> ``multipart/alternative`` (plain, then html)

``Bcc`` recipients are never written to headers; transports deliver to
them through the envelope only.
"""

from __future__ import annotations

from email.message import EmailMessage
from email.policy import SMTP
from typing import TYPE_CHECKING

from simplemail.exceptions import MailConfigurationError
from simplemail.models import AlternativeBody, HtmlBody, PlainTextBody

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from simplemail.address import EmailAddress
    from simplemail.models import AssembledMessage, MailBody

__all__ = ["RESERVED_HEADERS", "render_mime"]

#: Headers owned by the renderer that extra headers may not override.
RESERVED_HEADERS = frozenset(
    {
        "bcc",
        "cc",
        "content-transfer-encoding",
        "content-type",
        "from",
        "mime-version",
        "subject",
        "to",
    }
)


def _join(addresses: Iterable[EmailAddress]) -> str:
    return ", ".join(str(address) for address in addresses)


def _has_line_breaks(value: str) -> bool:
    return len(value.splitlines()) > 1 or value.endswith(("\r", "\n"))


def _set_body(message: EmailMessage, body: MailBody, charset: str) -> None:
    if isinstance(body, AlternativeBody):
        message.set_content(body.plain, subtype="plain", charset=charset)
        message.add_alternative(body.html, subtype="html", charset=charset)
    elif isinstance(body, PlainTextBody):
        message.set_content(body.content, subtype="plain", charset=charset)
    elif isinstance(body, HtmlBody):
        message.set_content(body.content, subtype="html", charset=charset)
    else:
        raise TypeError(f"Unsupported body type: {type(body).__name__}")


def render_mime(
    message: AssembledMessage,
    *,
    charset: str = "utf-8",
    headers: Mapping[str, str] | None = None,
) -> EmailMessage:
    """Build the MIME representation of *message*.

    Line breaks in the subject are folded into spaces.

    Args:
        message: Assembled message.
        charset: Charset of the text parts.
        headers: Extra headers (``Reply-To``, ``X-Mailer``...) added after
            the standard ones.

    Returns:
        The rendered message, using the SMTP policy (CRLF line endings).

    Raises:
        MailConfigurationError: If an extra header collides with a header
            owned by the renderer or its value contains line breaks.
        TypeError: If the body is not a known variant.

    Examples:
        >>> from simplemail.builder import MailBuilder
        >>> assembled = MailBuilder().sender("a@x.com").to("b@x.com").text("hi").html("<p>hi</p>").assemble()
        >>> rendered = render_mime(assembled)
        >>> rendered.get_content_type()
        'multipart/alternative'
        >>> [part.get_content_type() for part in rendered.iter_parts()]
        ['text/plain', 'text/html']
    """
    extra = dict(headers or {})
    reserved = sorted(name for name in extra if name.lower() in RESERVED_HEADERS)
    if reserved:
        raise MailConfigurationError(f"Reserved header(s) cannot be overridden: {', '.join(reserved)}")
    multiline = sorted(name for name, value in extra.items() if _has_line_breaks(str(value)))
    if multiline:
        raise MailConfigurationError(f"Header value(s) contain line breaks: {', '.join(multiline)}")

    rendered = EmailMessage(policy=SMTP)
    rendered["From"] = str(message.sender)
    rendered["To"] = _join(message.to)
    if message.cc:
        rendered["Cc"] = _join(message.cc)
    rendered["Subject"] = " ".join((message.subject or "").splitlines())
    for name, value in extra.items():
        rendered[name] = value

    _set_body(rendered, message.body, charset)
    return rendered
