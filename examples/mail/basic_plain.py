"""Plain-text mail composition using :class:`simplemail.MailBuilder`."""

from __future__ import annotations

from simplemail import MailBuilder, render_mime


def build_plain_message() -> None:
    """Assemble a plain-text message and print the RFC822 payload."""
    message = (
        MailBuilder()
        .sender("sender@example.com")
        .to("user@example.com")
        .subject("Plain Greetings")
        .text("Hello from simplemail!\nThis message uses the plain content type.")
        .assemble()
    )
    print(render_mime(message).as_string())


if __name__ == "__main__":  # pragma: no cover - manual example
    build_plain_message()
