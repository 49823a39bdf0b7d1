"""AWS SES transport for async email delivery.

Renders the assembled message to raw MIME bytes and sends it through the
AWS Simple Email Service with ``send_raw_email``. The envelope recipients
(including bcc) are passed as ``Destinations``. The boto3 client is
synchronous, so calls are wrapped with ``run_in_executor`` to avoid
blocking the event loop.

Requirements:
    pip install simplemail[ses]

Examples:
    Basic usage with the default credential chain::

        from simplemail import MailBuilder
        from simplemail.transports import SesTransport

        transport = SesTransport(region="eu-west-3")
        mail = MailBuilder(transport=transport)
        await mail.sender("you@example.com").to("user@example.com").text("Hi").send_async()

    From ``simplemail.conf.yml``::

        transport = SesTransport.from_config()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from simplemail.config import get_mail_settings
from simplemail.exceptions import MailConfigurationError, MailTransportError
from simplemail.logging import TRACE_LEVEL
from simplemail.mime import render_mime
from simplemail.transport import AsyncMailTransport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from simplemail.address import EmailAddress
    from simplemail.models import AssembledMessage

__all__ = ["SesResponse", "SesTransport"]

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SesResponse:
    """Response from AWS SES after sending an email.

    Attributes:
        message_id: The unique message ID assigned by SES.
    """

    message_id: str


class SesTransport(AsyncMailTransport):
    """Async transport for sending emails via AWS SES.

    Args:
        region: AWS region for the SES endpoint (default: ``eu-west-3``).
        aws_access_key_id: Explicit AWS access key. If omitted, boto3 uses
            its default credential chain.
        aws_secret_access_key: Explicit AWS secret key. Must be provided
            together with *aws_access_key_id*.
        timeout: Boto3 connect/read timeout in seconds (default: 30.0).
        charset: Charset of the rendered text parts.
        headers: Extra headers added to every rendered message.

    Raises:
        MailConfigurationError: If *region* is empty, *timeout* is not
            positive, or only one of the two credential arguments is given.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        region: str = "eu-west-3",
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        timeout: float = 30.0,
        charset: str = "utf-8",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        if not region:
            raise MailConfigurationError("AWS region is required")

        if (aws_access_key_id is None) != (aws_secret_access_key is None):
            raise MailConfigurationError("Both aws_access_key_id and aws_secret_access_key must be provided together")

        if timeout <= 0:
            raise MailConfigurationError("Timeout must be greater than 0")

        self._region = region
        self._aws_access_key_id = aws_access_key_id
        self._aws_secret_access_key = aws_secret_access_key
        self._timeout = timeout
        self._charset = charset
        self._headers = dict(headers or {})
        self._last_response: SesResponse | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None, **overrides: Any) -> SesTransport:
        """Create a transport from ``mail`` settings in the configuration.

        Args:
            config: Configuration mapping. Defaults to the loaded global config.
            **overrides: Constructor arguments taking precedence over config.

        Returns:
            Configured transport.
        """
        settings = get_mail_settings(config)
        kwargs: dict[str, Any] = {
            "region": settings.ses_region,
            "timeout": settings.ses_timeout,
            "charset": settings.charset,
            "headers": settings.headers,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def last_response(self) -> SesResponse | None:
        """Return the response from the last successful send."""
        return self._last_response

    async def send(self, message: AssembledMessage, recipients: Sequence[EmailAddress]) -> None:
        """Send *message* via AWS SES using ``send_raw_email``.

        When TRACE logging is enabled, request metadata is logged.

        Args:
            message: The assembled message.
            recipients: Envelope recipients, passed as ``Destinations``.

        Raises:
            MailTransportError: If the SES API call fails.
            MailConfigurationError: If boto3 is not installed or AWS
                credentials cannot be resolved.
        """
        try:
            import boto3  # pylint: disable=import-outside-toplevel
            from botocore.config import Config as BotoConfig  # pylint: disable=import-outside-toplevel
            from botocore.exceptions import (  # pylint: disable=import-outside-toplevel
                ClientError,
                EndpointConnectionError,
                NoCredentialsError,
            )
        except ImportError as e:
            raise MailConfigurationError(
                "boto3 is required for SesTransport. Install with: pip install simplemail[ses]"
            ) from e

        trace_enabled = log.isEnabledFor(TRACE_LEVEL)
        if trace_enabled:
            log.log(TRACE_LEVEL, "[SES] Sending email via AWS SES (region=%s)", self._region)
            log.log(TRACE_LEVEL, "[SES] From: %s, Destinations: %d", message.sender, len(recipients))

        raw_message = self._build_raw_message(message)
        destinations = [address.address for address in recipients]
        client = self._create_client(boto3, BotoConfig)

        loop = asyncio.get_running_loop()

        try:
            response: dict[str, Any] = await loop.run_in_executor(
                None,
                lambda: client.send_raw_email(
                    Source=message.sender.address,
                    Destinations=destinations,
                    RawMessage={"Data": raw_message},
                ),
            )

            message_id = response.get("MessageId", "")
            self._last_response = SesResponse(message_id=message_id)
            log.debug("Email sent via SES: %s", message_id)
            if trace_enabled:
                log.log(TRACE_LEVEL, "[SES] Message sent successfully, MessageId=%s", message_id)

        except ClientError as e:
            error_msg = e.response.get("Error", {}).get("Message", str(e))
            if trace_enabled:
                log.log(TRACE_LEVEL, "[SES] ClientError: %s", error_msg)
            raise MailTransportError(f"SES API error: {error_msg}") from e
        except NoCredentialsError as e:
            raise MailConfigurationError(f"AWS credentials not found: {e}") from e
        except EndpointConnectionError as e:
            raise MailTransportError(f"SES endpoint connection failed: {e}") from e

    def _build_raw_message(self, message: AssembledMessage) -> bytes:
        """Render *message* to raw MIME bytes for SES."""
        return render_mime(message, charset=self._charset, headers=self._headers).as_bytes()

    def _create_client(self, boto3_module: Any, boto_config_cls: Any) -> Any:
        """Create a boto3 SES client with stored configuration.

        Args:
            boto3_module: The imported boto3 module.
            boto_config_cls: The botocore Config class.

        Returns:
            A boto3 SES client instance.
        """
        kwargs: dict[str, Any] = {
            "service_name": "ses",
            "region_name": self._region,
            "config": boto_config_cls(
                connect_timeout=self._timeout,
                read_timeout=self._timeout,
            ),
        }

        if self._aws_access_key_id is not None:
            kwargs["aws_access_key_id"] = self._aws_access_key_id
            kwargs["aws_secret_access_key"] = self._aws_secret_access_key

        return boto3_module.client(**kwargs)
