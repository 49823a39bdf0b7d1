"""Transport implementations for mail delivery.

Available transports:
    - MemoryTransport: In-memory recorder (sync)
    - SesTransport: AWS SES raw email (async, requires the ``ses`` extra)
"""

from simplemail.transport import MemoryTransport
from simplemail.transports.ses import SesResponse, SesTransport

__all__ = [
    "MemoryTransport",
    "SesResponse",
    "SesTransport",
]
