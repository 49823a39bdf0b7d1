"""Build, validate, and assemble email messages.

A :class:`MailBuilder` accumulates the sender, recipients, subject, and
bodies through chained calls. :func:`assemble` validates the result and
returns an immutable :class:`AssembledMessage` whose body is one of
:class:`PlainTextBody`, :class:`HtmlBody`, or :class:`AlternativeBody`.
Transports receive that message together with its envelope recipients.

Examples:
    >>> from simplemail import MailBuilder
    >>> message = (
    ...     MailBuilder()
    ...     .sender("a@x.com")
    ...     .to("b@x.com")
    ...     .text("hello")
    ...     .html("<p>hi</p>")
    ...     .assemble()
    ... )
    >>> message.body
    AlternativeBody(plain='hello', html='<p>hi</p>')
"""

from simplemail.address import AddressParser, EmailAddress, parse_address
from simplemail.assembler import assemble, validate
from simplemail.builder import MailBuilder
from simplemail.exceptions import (
    InvalidAddressError,
    InvalidArgumentError,
    MailConfigurationError,
    MailError,
    MailTransportError,
    MailValidationError,
    MissingBodyError,
    MissingRecipientError,
    MissingSenderError,
    SimplemailError,
)
from simplemail.meta import __version__
from simplemail.mime import render_mime
from simplemail.models import AlternativeBody, AssembledMessage, HtmlBody, MailBody, PlainTextBody
from simplemail.transport import AsyncMailTransport, AsyncTransportWrapper, MailTransport, MemoryTransport

__all__ = [
    "AddressParser",
    "AlternativeBody",
    "AssembledMessage",
    "AsyncMailTransport",
    "AsyncTransportWrapper",
    "EmailAddress",
    "HtmlBody",
    "InvalidAddressError",
    "InvalidArgumentError",
    "MailBody",
    "MailBuilder",
    "MailConfigurationError",
    "MailError",
    "MailTransport",
    "MailTransportError",
    "MailValidationError",
    "MemoryTransport",
    "MissingBodyError",
    "MissingRecipientError",
    "MissingSenderError",
    "PlainTextBody",
    "SimplemailError",
    "__version__",
    "assemble",
    "parse_address",
    "render_mime",
    "validate",
]
