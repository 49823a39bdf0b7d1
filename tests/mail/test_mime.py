"""Tests for MIME rendering of assembled messages."""

from __future__ import annotations

import pytest

from simplemail import MailBuilder
from simplemail.exceptions import MailConfigurationError
from simplemail.mime import render_mime
from simplemail.models import AssembledMessage


def _assembled(**fields: str) -> AssembledMessage:
    """Assemble a message from a sender/to pair plus optional fields."""
    builder = MailBuilder().sender("Alice <a@x.com>").to("b@x.com")
    if "text" in fields:
        builder.text(fields["text"])
    if "html" in fields:
        builder.html(fields["html"])
    if "subject" in fields:
        builder.subject(fields["subject"])
    return builder.assemble()


class TestStructure:
    """MIME structure follows the body variant."""

    def test_plain_text_single_part(self) -> None:
        """PlainTextBody renders a single text/plain part."""
        message = render_mime(_assembled(text="Hello"))
        assert message.get_content_type() == "text/plain"
        assert not message.is_multipart()
        assert message.get_content().strip() == "Hello"
        assert message.get_body("html") is None

    def test_html_single_part(self) -> None:
        """HtmlBody renders a single text/html part."""
        message = render_mime(_assembled(html="<p>Hi</p>"))
        assert message.get_content_type() == "text/html"
        assert message.get_body("plain") is None

    def test_alternative_plain_before_html(self) -> None:
        """AlternativeBody renders multipart/alternative, plain first."""
        message = render_mime(_assembled(text="Hello", html="<p>Hi</p>"))
        assert message.get_content_type() == "multipart/alternative"
        parts = list(message.iter_parts())
        assert [part.get_content_type() for part in parts] == ["text/plain", "text/html"]
        assert parts[0].get_content().strip() == "Hello"
        assert parts[1].get_content().strip() == "<p>Hi</p>"

    def test_charset(self) -> None:
        """Text parts carry the requested charset."""
        message = render_mime(_assembled(text="Héllo"), charset="utf-8")
        assert message.get_content_charset() == "utf-8"

    def test_unknown_body_type_raises(self) -> None:
        """Unknown body variants are rejected."""
        from dataclasses import replace

        message = replace(_assembled(text="x"), body="raw")  # type: ignore[arg-type]
        with pytest.raises(TypeError, match="Unsupported body type"):
            render_mime(message)


class TestHeaders:
    """Header rendering."""

    def test_standard_headers(self) -> None:
        """From, To, and Subject are rendered."""
        message = render_mime(_assembled(text="x", subject="Greetings"))
        assert message["From"] == "Alice <a@x.com>"
        assert message["To"] == "b@x.com"
        assert message["Subject"] == "Greetings"

    def test_absent_subject_is_empty_header(self) -> None:
        """A missing subject renders as an empty header."""
        message = render_mime(_assembled(text="x"))
        assert message["Subject"] == ""

    def test_cc_rendered_bcc_hidden(self) -> None:
        """Cc is rendered; Bcc never is."""
        assembled = (
            MailBuilder().sender("a@x.com").to("b@x.com", "c@x.com").cc("d@x.com").bcc("e@x.com").text("x").assemble()
        )
        message = render_mime(assembled)
        assert message["To"] == "b@x.com, c@x.com"
        assert message["Cc"] == "d@x.com"
        assert message["Bcc"] is None
        assert b"e@x.com" not in message.as_bytes()

    def test_no_cc_header_when_empty(self) -> None:
        """Cc is omitted when there are no cc recipients."""
        assert render_mime(_assembled(text="x"))["Cc"] is None

    def test_extra_headers(self) -> None:
        """Extra headers are added."""
        message = render_mime(_assembled(text="x"), headers={"Reply-To": "r@x.com", "X-Mailer": "simplemail"})
        assert message["Reply-To"] == "r@x.com"
        assert message["X-Mailer"] == "simplemail"

    @pytest.mark.parametrize("name", ["Bcc", "content-type", "MIME-Version", "From"])
    def test_reserved_headers_rejected(self, name: str) -> None:
        """Headers owned by the renderer cannot be overridden."""
        with pytest.raises(MailConfigurationError, match="Reserved header"):
            render_mime(_assembled(text="x"), headers={name: "value"})

    def test_crlf_line_endings(self) -> None:
        """Rendered bytes use SMTP line endings."""
        raw = render_mime(_assembled(text="line1\nline2")).as_bytes()
        assert b"\r\n" in raw

    @pytest.mark.parametrize(
        ("subject", "expected"),
        [("Hello\nWorld", "Hello World"), ("Hello\r\nWorld", "Hello World"), ("Trailing\n", "Trailing")],
    )
    def test_subject_line_breaks_folded(self, subject: str, expected: str) -> None:
        """Line breaks in the subject become spaces instead of failing."""
        message = render_mime(_assembled(text="x", subject=subject))
        assert message["Subject"] == expected

    def test_build_with_multiline_subject(self) -> None:
        """``MailBuilder.build`` renders a subject containing a line break."""
        message = MailBuilder().sender("a@x.com").to("b@x.com").subject("a\nb").text("x").build()
        assert message["Subject"] == "a b"

    @pytest.mark.parametrize("value", ["evil\r\nBcc: leak@x.com", "line\n", "a\rb"])
    def test_extra_header_line_breaks_rejected(self, value: str) -> None:
        """Extra header values with line breaks are a configuration error."""
        with pytest.raises(MailConfigurationError, match="X-Note"):
            render_mime(_assembled(text="x"), headers={"X-Note": value})
