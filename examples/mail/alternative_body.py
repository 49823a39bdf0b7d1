"""Text plus HTML composition rendered as ``multipart/alternative``."""

from __future__ import annotations

from simplemail import AlternativeBody, MailBuilder


def build_alternative_message() -> None:
    """Assemble a message with both bodies and show the chosen variant."""
    builder = (
        MailBuilder()
        .sender("Reports <reports@example.com>")
        .to("team@example.com")
        .cc("lead@example.com")
        .bcc("archive@example.com")
        .subject("Weekly report")
        .text("Weekly report\n\nAll systems nominal.")
        .html("<h1>Weekly report</h1><p>All systems nominal.</p>")
    )
    message = builder.assemble()
    assert isinstance(message.body, AlternativeBody)

    print(f"Envelope recipients: {', '.join(a.address for a in message.envelope_recipients)}")
    # Bcc recipients are delivered but never rendered
    print(builder.build(headers={"X-Mailer": "simplemail"}).as_string())


if __name__ == "__main__":  # pragma: no cover - manual example
    build_alternative_message()
