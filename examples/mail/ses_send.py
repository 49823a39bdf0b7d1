"""Send a message through AWS SES.

Requires ``pip install simplemail[ses]`` and AWS credentials available to
boto3 (environment, shared config, or instance role). The sender address
must be verified in SES.
"""

from __future__ import annotations

import asyncio
import os

from simplemail import MailBuilder
from simplemail.logging import init_logging
from simplemail.transports import SesTransport


async def send_via_ses() -> None:
    """Send a short HTML message and print the SES message ID."""
    init_logging(level=os.environ.get("SIMPLEMAIL_LOG_LEVEL", "TRACE"))
    transport = SesTransport.from_config(region=os.environ.get("AWS_REGION", "eu-west-3"))

    await (
        MailBuilder(transport=transport)
        .sender(os.environ["SES_SENDER"])
        .to(os.environ["SES_RECIPIENT"])
        .subject("simplemail SES check")
        .text("Sent with simplemail over AWS SES.")
        .html("<p>Sent with <b>simplemail</b> over AWS SES.</p>")
        .send_async()
    )
    if transport.last_response is not None:
        print(f"MessageId: {transport.last_response.message_id}")


if __name__ == "__main__":  # pragma: no cover - manual example
    asyncio.run(send_via_ses())
