"""Fluent builder accumulating the state of an email message.

The builder only checks the *shape* of each argument as it arrives
(``None`` or unparseable addresses fail at the call site). Completeness
(sender, ``to`` recipient, body) is checked later by
:func:`simplemail.assembler.assemble`.

Examples:
    >>> message = (
    ...     MailBuilder()
    ...     .sender("a@x.com")
    ...     .to("b@x.com")
    ...     .subject("Greetings")
    ...     .text("hello")
    ...     .assemble()
    ... )
    >>> message.body
    PlainTextBody(content='hello')
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simplemail.address import AddressParser, EmailAddress
from simplemail.assembler import assemble
from simplemail.exceptions import (
    InvalidArgumentError,
    MailError,
    MailConfigurationError,
    MailTransportError,
)
from simplemail.mime import render_mime
from simplemail.transport import AsyncMailTransport, AsyncTransportWrapper, MailTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from email.message import EmailMessage

    from simplemail.models import AssembledMessage

__all__ = ["AddressInput", "MailBuilder"]

log = logging.getLogger(__name__)

AddressInput = EmailAddress | str


class MailBuilder:
    """Accumulate sender, recipients, subject, and bodies through chained calls.

    Sender, subject, and bodies overwrite on each call. ``to``, ``cc``, and
    ``bcc`` append, preserving insertion order.

    Args:
        transport: Backend used by :meth:`send` and :meth:`send_async`.
        parser: Parser resolving raw address strings.

    Examples:
        >>> builder = MailBuilder().to("a@x.com").to("b@x.com")
        >>> [str(address) for address in builder.to_addresses]
        ['a@x.com', 'b@x.com']
    """

    def __init__(
        self,
        *,
        transport: MailTransport | AsyncMailTransport | None = None,
        parser: AddressParser | None = None,
    ) -> None:
        self._transport = transport
        self._parser = parser or AddressParser()
        self._sender: EmailAddress | None = None
        self._to: list[EmailAddress] = []
        self._cc: list[EmailAddress] = []
        self._bcc: list[EmailAddress] = []
        self._subject: str | None = None
        self._text: str | None = None
        self._html: str | None = None

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    def sender(self, address: AddressInput) -> MailBuilder:
        """Set the sender, replacing any previous one.

        Args:
            address: An :class:`EmailAddress` or a raw address string.

        Returns:
            This builder.

        Raises:
            InvalidArgumentError: If *address* is ``None``.
            InvalidAddressError: If a raw string cannot be parsed.
        """
        self._sender = self._resolve("sender", address)
        return self

    def to(self, *addresses: AddressInput) -> MailBuilder:
        """Append primary recipients.

        Every argument is resolved before anything is appended, so a bad
        value leaves the recipient list untouched.

        Raises:
            InvalidArgumentError: If any address is ``None``.
            InvalidAddressError: If any raw string cannot be parsed.
        """
        self._to.extend(self._resolve_all("to", addresses))
        return self

    def cc(self, *addresses: AddressInput) -> MailBuilder:
        """Append carbon-copy recipients. Same contract as :meth:`to`."""
        self._cc.extend(self._resolve_all("cc", addresses))
        return self

    def bcc(self, *addresses: AddressInput) -> MailBuilder:
        """Append blind carbon-copy recipients. Same contract as :meth:`to`."""
        self._bcc.extend(self._resolve_all("bcc", addresses))
        return self

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def subject(self, text: str | None) -> MailBuilder:
        """Set the subject. ``None`` clears it."""
        self._subject = text
        return self

    def text(self, content: str | None) -> MailBuilder:
        """Set the plain-text body. ``None`` clears it."""
        self._text = content
        return self

    def html(self, content: str | None) -> MailBuilder:
        """Set the HTML body. ``None`` clears it."""
        self._html = content
        return self

    # Aliases for the long-form chained API
    from_ = sender
    with_subject = subject
    with_text = text
    with_html = html

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def sender_address(self) -> EmailAddress | None:
        """Return the current sender, if any."""
        return self._sender

    @property
    def to_addresses(self) -> tuple[EmailAddress, ...]:
        """Return the ``to`` recipients in insertion order."""
        return tuple(self._to)

    @property
    def cc_addresses(self) -> tuple[EmailAddress, ...]:
        """Return the ``cc`` recipients in insertion order."""
        return tuple(self._cc)

    @property
    def bcc_addresses(self) -> tuple[EmailAddress, ...]:
        """Return the ``bcc`` recipients in insertion order."""
        return tuple(self._bcc)

    @property
    def subject_text(self) -> str | None:
        """Return the current subject."""
        return self._subject

    @property
    def text_body(self) -> str | None:
        """Return the current plain-text body."""
        return self._text

    @property
    def html_body(self) -> str | None:
        """Return the current HTML body."""
        return self._html

    # ------------------------------------------------------------------
    # Assembly and delivery
    # ------------------------------------------------------------------

    def transport(self, backend: MailTransport | AsyncMailTransport) -> MailBuilder:
        """Attach the transport used by :meth:`send` and :meth:`send_async`."""
        self._transport = backend
        return self

    def assemble(self) -> AssembledMessage:
        """Validate the accumulated state and return an :class:`AssembledMessage`."""
        return assemble(self)

    def build(
        self,
        *,
        charset: str = "utf-8",
        headers: Mapping[str, str] | None = None,
    ) -> EmailMessage:
        """Assemble and render the message as an :class:`EmailMessage`.

        Args:
            charset: Charset of the text parts.
            headers: Extra headers added after the standard ones.

        Returns:
            The MIME message.
        """
        return render_mime(self.assemble(), charset=charset, headers=headers)

    def send(self) -> AssembledMessage:
        """Assemble the message and deliver it through the configured transport.

        Returns:
            The assembled message that was delivered.

        Raises:
            MailValidationError: If the message is incomplete.
            MailConfigurationError: If no sync transport is configured.
            MailTransportError: If delivery fails.
        """
        if self._transport is None:
            raise MailConfigurationError("No transport configured for MailBuilder")
        if isinstance(self._transport, AsyncMailTransport):
            raise MailConfigurationError("Configured transport is async, use send_async()")

        message = self.assemble()
        recipients = message.envelope_recipients
        log.debug("Sending mail from %s to %d recipient(s)", message.sender, len(recipients))
        try:
            self._transport.send(message, recipients)
        except MailError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise MailTransportError(f"Transport failed: {e}") from e
        return message

    async def send_async(self) -> AssembledMessage:
        """Assemble the message and deliver it asynchronously.

        Sync transports are run in a thread pool through
        :class:`AsyncTransportWrapper`.

        Returns:
            The assembled message that was delivered.

        Raises:
            MailValidationError: If the message is incomplete.
            MailConfigurationError: If no transport is configured.
            MailTransportError: If delivery fails.
        """
        if self._transport is None:
            raise MailConfigurationError("No transport configured for MailBuilder")

        backend = self._transport
        if isinstance(backend, MailTransport):
            backend = AsyncTransportWrapper(backend)

        message = self.assemble()
        recipients = message.envelope_recipients
        log.debug("Sending mail (async) from %s to %d recipient(s)", message.sender, len(recipients))
        try:
            await backend.send(message, recipients)
        except MailError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise MailTransportError(f"Transport failed: {e}") from e
        return message

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, argument: str, address: AddressInput | None) -> EmailAddress:
        if address is None:
            raise InvalidArgumentError(argument)
        if isinstance(address, EmailAddress):
            return address
        return self._parser.parse(address)

    def _resolve_all(self, argument: str, addresses: tuple[AddressInput, ...]) -> list[EmailAddress]:
        return [self._resolve(argument, address) for address in addresses]

    def __repr__(self) -> str:
        return (
            f"MailBuilder(sender={self._sender!r}, to={self._to!r}, cc={self._cc!r}, bcc={self._bcc!r}, "
            f"subject={self._subject!r}, text={self._text!r}, html={self._html!r})"
        )
