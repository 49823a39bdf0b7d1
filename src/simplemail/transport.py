"""Transport contracts for delivering assembled messages.

A transport receives an :class:`AssembledMessage` and the envelope
recipients (to, cc, and bcc) and either returns normally or raises
:class:`MailTransportError`. Protocol, session, and retry concerns belong
to the concrete transport.

Available here:
    - MailTransport: Synchronous contract
    - AsyncMailTransport: Asynchronous contract
    - AsyncTransportWrapper: Runs a sync transport in a thread pool
    - MemoryTransport: Records deliveries in memory
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Executor

    from simplemail.address import EmailAddress
    from simplemail.models import AssembledMessage

__all__ = [
    "AsyncMailTransport",
    "AsyncTransportWrapper",
    "Delivery",
    "MailTransport",
    "MemoryTransport",
]

log = logging.getLogger(__name__)


class MailTransport(ABC):
    """Synchronous delivery backend."""

    @abstractmethod
    def send(self, message: AssembledMessage, recipients: Sequence[EmailAddress]) -> None:
        """Deliver *message* to *recipients*.

        Args:
            message: The assembled message.
            recipients: Envelope recipients (to, cc, and bcc).

        Raises:
            MailTransportError: If delivery fails.
        """


class AsyncMailTransport(ABC):
    """Asynchronous delivery backend."""

    @abstractmethod
    async def send(self, message: AssembledMessage, recipients: Sequence[EmailAddress]) -> None:
        """Deliver *message* to *recipients* without blocking the event loop.

        Raises:
            MailTransportError: If delivery fails.
        """


class AsyncTransportWrapper(AsyncMailTransport):
    """Expose a :class:`MailTransport` through the async contract.

    The wrapped ``send`` runs in *executor* (the loop default when ``None``).

    Args:
        transport: Synchronous transport to wrap.
        executor: Executor running the blocking call.
    """

    def __init__(self, transport: MailTransport, *, executor: Executor | None = None) -> None:
        self._transport = transport
        self._executor = executor

    @property
    def transport(self) -> MailTransport:
        """Return the wrapped synchronous transport."""
        return self._transport

    async def send(self, message: AssembledMessage, recipients: Sequence[EmailAddress]) -> None:
        """Run the wrapped transport's ``send`` in the executor."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self._executor, partial(self._transport.send, message, recipients))


@dataclass(frozen=True, slots=True)
class Delivery:
    """A message recorded by :class:`MemoryTransport`.

    Attributes:
        message: The delivered message.
        recipients: Envelope recipients it was delivered to.
    """

    message: AssembledMessage
    recipients: tuple[EmailAddress, ...]


class MemoryTransport(MailTransport):
    """Record deliveries in memory instead of sending them.

    Useful for tests and dry runs.

    Examples:
        >>> from simplemail.builder import MailBuilder
        >>> transport = MemoryTransport()
        >>> _ = MailBuilder(transport=transport).sender("a@x.com").to("b@x.com").text("hi").send()
        >>> len(transport.deliveries)
        1
    """

    def __init__(self) -> None:
        self._deliveries: list[Delivery] = []

    @property
    def deliveries(self) -> tuple[Delivery, ...]:
        """Return recorded deliveries, oldest first."""
        return tuple(self._deliveries)

    @property
    def messages(self) -> tuple[AssembledMessage, ...]:
        """Return recorded messages, oldest first."""
        return tuple(delivery.message for delivery in self._deliveries)

    def send(self, message: AssembledMessage, recipients: Sequence[EmailAddress]) -> None:
        """Record *message* and its envelope recipients."""
        self._deliveries.append(Delivery(message=message, recipients=tuple(recipients)))
        log.debug("Recorded mail to %d recipient(s)", len(recipients))

    def clear(self) -> None:
        """Forget all recorded deliveries."""
        self._deliveries.clear()
