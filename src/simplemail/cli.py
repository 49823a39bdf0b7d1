"""Command-line interface for simplemail.

Usage::

    simplemail preview --from a@x.com --to b@x.com --subject Hi --text hello
    simplemail preview --from a@x.com --to b@x.com --html "<p>hi</p>" --summary
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from simplemail.builder import MailBuilder
from simplemail.config import get_mail_settings, load_config
from simplemail.exceptions import SimplemailError
from simplemail.logging import init_logging
from simplemail.meta import __app_name__, __version__
from simplemail.models import AlternativeBody, AssembledMessage, HtmlBody
from simplemail.mime import render_mime

app = typer.Typer(name=__app_name__, help="Build and preview email messages.", no_args_is_help=True)

console = Console()
err_console = Console(stderr=True)


def exit_error(message: str, code: int = 1) -> NoReturn:
    """Print *message* in red on stderr and exit with *code*."""
    err_console.print(f"[red]Error:[/] {message}", highlight=False)
    raise typer.Exit(code=code)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{__app_name__} {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Build and preview email messages."""


def _body_kind(message: AssembledMessage) -> str:
    if isinstance(message.body, AlternativeBody):
        return "multipart/alternative"
    if isinstance(message.body, HtmlBody):
        return "text/html"
    return "text/plain"


def _render_summary(message: AssembledMessage) -> None:
    """Print a table describing the assembled message."""
    table = Table(title="Assembled Message", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("From", str(message.sender))
    table.add_row("To", ", ".join(str(address) for address in message.to))
    table.add_row("Cc", ", ".join(str(address) for address in message.cc) or "-")
    table.add_row("Bcc", ", ".join(str(address) for address in message.bcc) or "-")
    table.add_row("Subject", message.subject if message.subject is not None else "[dim](none)[/]")
    table.add_row("Body", _body_kind(message))
    table.add_row("Envelope", str(len(message.envelope_recipients)))
    console.print(table)


@app.command()
def preview(  # noqa: PLR0913
    sender: str = typer.Option(..., "--from", "-f", help="Sender address."),
    to: list[str] = typer.Option(..., "--to", "-t", help="Primary recipient (repeatable)."),
    cc: list[str] = typer.Option([], "--cc", help="Carbon-copy recipient (repeatable)."),
    bcc: list[str] = typer.Option([], "--bcc", help="Blind carbon-copy recipient (repeatable)."),
    subject: str | None = typer.Option(None, "--subject", "-s", help="Subject line."),
    text: str | None = typer.Option(None, "--text", help="Plain-text body."),
    html: str | None = typer.Option(None, "--html", help="HTML body."),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to simplemail.conf.yml."),
    summary: bool = typer.Option(False, "--summary", help="Show a summary table instead of the raw message."),
) -> None:
    """Assemble a message and print its RFC 822 rendering.

    Exit codes: 0 (rendered), 1 (invalid message or configuration).
    """
    try:
        config = load_config(config_path)
        init_logging(config=config)
        settings = get_mail_settings(config)

        message = (
            MailBuilder()
            .sender(sender)
            .to(*to)
            .cc(*cc)
            .bcc(*bcc)
            .subject(subject)
            .text(text)
            .html(html)
            .assemble()
        )
        if summary:
            _render_summary(message)
            return
        rendered = render_mime(message, charset=settings.charset, headers=settings.headers)
    except SimplemailError as exc:
        exit_error(str(exc))

    typer.echo(rendered.as_string(policy=rendered.policy.clone(linesep="\n")))


if __name__ == "__main__":  # pragma: no cover
    app()
