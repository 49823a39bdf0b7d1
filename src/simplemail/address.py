"""Email address value type and the default address parser.

:class:`EmailAddress` is an immutable wrapper around a syntactically valid
``local-part@domain`` address with an optional display name. Instances are
normally produced by :class:`AddressParser`, which accepts the usual header
forms::

    jane@example.com
    Jane Doe <jane@example.com>
    "Doe, Jane" <jane@example.com>

Examples:
    >>> parse_address("Jane Doe <jane@example.com>")
    EmailAddress(address='jane@example.com', display_name='Jane Doe')
    >>> str(EmailAddress("jane@example.com"))
    'jane@example.com'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from email.utils import formataddr, getaddresses

from simplemail.exceptions import InvalidAddressError

# ============================================================================
# Constants - Hard Limits
# ============================================================================

#: Maximum length of a full address (RFC 5321 path limit minus brackets).
MAX_ADDRESS_LENGTH = 254

#: Maximum length of the local part.
MAX_LOCAL_PART_LENGTH = 64

#: Characters allowed in an unquoted local part (RFC 5322 dot-atom text).
LOCAL_PART_PATTERN = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*$")

#: A single DNS label.
DOMAIN_LABEL_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")

_LINE_BREAKS = ("\r", "\n")


def validate_address(address: str) -> str:
    """Validate a bare ``local-part@domain`` address.

    Rules:
    - Cannot be empty or longer than 254 characters
    - Exactly one ``@`` separating a non-empty local part and a domain
    - Local part uses dot-atom characters, max 64 characters
    - Domain has at least two labels, each a valid DNS label
    - Top-level label is not purely numeric

    Args:
        address: Address to validate.

    Returns:
        The validated address (unchanged).

    Raises:
        InvalidAddressError: If the address is malformed.

    Examples:
        >>> validate_address("user@example.com")
        'user@example.com'
        >>> validate_address("user@localhost")
        Traceback (most recent call last):
            ...
        simplemail.exceptions.InvalidAddressError: Invalid email address 'user@localhost': malformed domain
    """
    if not address:
        raise InvalidAddressError(address, "address is empty")
    if any(char in address for char in _LINE_BREAKS):
        raise InvalidAddressError(address, "contains line breaks")
    if len(address) > MAX_ADDRESS_LENGTH:
        raise InvalidAddressError(address, f"too long (max {MAX_ADDRESS_LENGTH} chars)")
    if "@" not in address:
        raise InvalidAddressError(address, "missing '@'")

    local_part, _, domain = address.rpartition("@")
    if not local_part:
        raise InvalidAddressError(address, "empty local part")
    if len(local_part) > MAX_LOCAL_PART_LENGTH:
        raise InvalidAddressError(address, f"local part too long (max {MAX_LOCAL_PART_LENGTH} chars)")
    if not LOCAL_PART_PATTERN.match(local_part):
        raise InvalidAddressError(address, "malformed local part")

    labels = domain.split(".")
    if len(labels) < 2 or not all(DOMAIN_LABEL_PATTERN.match(label) for label in labels):
        raise InvalidAddressError(address, "malformed domain")
    if labels[-1].isdigit():
        raise InvalidAddressError(address, "malformed domain")
    return address


@dataclass(frozen=True, slots=True)
class EmailAddress:
    """A validated email address with an optional display name.

    Attributes:
        address: Bare ``local-part@domain`` address.
        display_name: Human-readable name, empty when absent.

    Raises:
        InvalidAddressError: If *address* is malformed or *display_name*
            contains line breaks.
    """

    address: str
    display_name: str = ""

    def __post_init__(self) -> None:
        """Validate the address and display name."""
        if not isinstance(self.address, str):
            raise InvalidAddressError(self.address, "expected a string")
        validate_address(self.address)
        if any(char in self.display_name for char in _LINE_BREAKS):
            raise InvalidAddressError(self.display_name, "display name contains line breaks")

    @property
    def local_part(self) -> str:
        """Return the part before the ``@``."""
        return self.address.rpartition("@")[0]

    @property
    def domain(self) -> str:
        """Return the part after the ``@``."""
        return self.address.rpartition("@")[2]

    @property
    def normalized(self) -> str:
        """Return the address with a lower-cased domain, used for comparisons."""
        return f"{self.local_part}@{self.domain.lower()}"

    def __str__(self) -> str:
        return formataddr((self.display_name, self.address)) if self.display_name else self.address


class AddressParser:
    """Parse raw strings into :class:`EmailAddress` values.

    Accepts a single address, bare or with a display name. Lists of
    addresses are rejected.

    Examples:
        >>> AddressParser().parse("b@x.com")
        EmailAddress(address='b@x.com', display_name='')
    """

    def parse(self, raw: str) -> EmailAddress:
        """Parse *raw* into an :class:`EmailAddress`.

        Args:
            raw: Address string, optionally with a display name.

        Returns:
            The parsed address.

        Raises:
            InvalidAddressError: If *raw* is not a single valid address.
        """
        if not isinstance(raw, str):
            raise InvalidAddressError(raw, "expected a string")
        text = raw.strip()
        if not text:
            raise InvalidAddressError(raw, "address is empty")
        if any(char in text for char in _LINE_BREAKS):
            raise InvalidAddressError(raw, "contains line breaks")

        pairs = getaddresses([text])
        if len(pairs) != 1:
            raise InvalidAddressError(raw, "expected a single address")

        display_name, address = pairs[0]
        if not address:
            raise InvalidAddressError(raw, "missing '@'" if "@" not in text else "unparseable address")
        if "@" not in address:
            raise InvalidAddressError(raw, "missing '@'")
        try:
            return EmailAddress(address, display_name)
        except InvalidAddressError as e:
            raise InvalidAddressError(raw, e.reason) from e


_default_parser = AddressParser()


def parse_address(raw: str) -> EmailAddress:
    """Parse *raw* with the default :class:`AddressParser`."""
    return _default_parser.parse(raw)


__all__ = [
    "DOMAIN_LABEL_PATTERN",
    "LOCAL_PART_PATTERN",
    "MAX_ADDRESS_LENGTH",
    "MAX_LOCAL_PART_LENGTH",
    "AddressParser",
    "EmailAddress",
    "parse_address",
    "validate_address",
]
