"""Tests for the assembled message data models."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from simplemail.address import EmailAddress
from simplemail.models import AlternativeBody, AssembledMessage, HtmlBody, PlainTextBody


def _make_message(
    to: tuple[str, ...] = ("b@x.com",),
    cc: tuple[str, ...] = (),
    bcc: tuple[str, ...] = (),
) -> AssembledMessage:
    """Create an AssembledMessage from bare addresses."""
    return AssembledMessage(
        sender=EmailAddress("a@x.com"),
        to=tuple(EmailAddress(a) for a in to),
        cc=tuple(EmailAddress(a) for a in cc),
        bcc=tuple(EmailAddress(a) for a in bcc),
        subject="Subject",
        body=PlainTextBody("hello"),
    )


class TestBodies:
    """Tests for the body variants."""

    @pytest.mark.parametrize(
        ("body", "field"),
        [
            (PlainTextBody("t"), "content"),
            (HtmlBody("<p>h</p>"), "content"),
            (AlternativeBody("t", "<p>h</p>"), "plain"),
            (AlternativeBody("t", "<p>h</p>"), "html"),
        ],
    )
    def test_bodies_are_frozen(self, body: object, field: str) -> None:
        """Body variants are immutable."""
        with pytest.raises(FrozenInstanceError):
            setattr(body, field, "changed")

    def test_variants_are_distinct(self) -> None:
        """Equal content in different variants does not compare equal."""
        assert PlainTextBody("x") != HtmlBody("x")

    def test_alternative_field_order(self) -> None:
        """Positional construction is plain first, then html."""
        body = AlternativeBody("plain", "<b>html</b>")
        assert (body.plain, body.html) == ("plain", "<b>html</b>")


class TestAssembledMessage:
    """Tests for derived recipient views."""

    def test_envelope_is_union_in_role_order(self) -> None:
        """Envelope lists to, then cc, then bcc."""
        message = _make_message(to=("t@x.com",), cc=("c@x.com",), bcc=("h@x.com",))
        assert [a.address for a in message.envelope_recipients] == ["t@x.com", "c@x.com", "h@x.com"]

    def test_envelope_drops_duplicates(self) -> None:
        """An address in several roles is delivered once."""
        message = _make_message(to=("t@x.com", "c@x.com"), cc=("c@X.COM",), bcc=("t@x.com",))
        assert [a.address for a in message.envelope_recipients] == ["t@x.com", "c@x.com"]

    def test_envelope_keeps_local_part_case(self) -> None:
        """Local parts are compared case-sensitively."""
        message = _make_message(to=("User@x.com",), cc=("user@x.com",))
        assert len(message.envelope_recipients) == 2

    def test_header_recipients_exclude_bcc(self) -> None:
        """Header recipients never include bcc."""
        message = _make_message(to=("t@x.com",), cc=("c@x.com",), bcc=("h@x.com",))
        assert [a.address for a in message.header_recipients] == ["t@x.com", "c@x.com"]

    def test_equality(self) -> None:
        """Messages with equal fields compare equal."""
        assert _make_message() == _make_message()
