"""Tests for the simplemail command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from simplemail import meta
from simplemail.cli import app

pytestmark = [pytest.mark.cli, pytest.mark.usefixtures("reset_logging")]

runner = CliRunner()

BASE_ARGS = ["preview", "--from", "a@x.com", "--to", "b@x.com"]


def test_app_help() -> None:
    """``--help`` lists the preview command."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "preview" in result.stdout


def test_app_version() -> None:
    """``--version`` prints the package version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert meta.__version__ in result.stdout


class TestPreview:
    """Tests for the preview command."""

    def test_plain_message(self) -> None:
        """A text body renders as a text/plain message."""
        result = runner.invoke(app, [*BASE_ARGS, "--subject", "Hi", "--text", "hello"])
        assert result.exit_code == 0, result.output
        assert "From: a@x.com" in result.stdout
        assert "To: b@x.com" in result.stdout
        assert "Subject: Hi" in result.stdout
        assert "Content-Type: text/plain" in result.stdout
        assert "hello" in result.stdout

    def test_alternative_message(self) -> None:
        """Text plus HTML renders as multipart/alternative."""
        result = runner.invoke(app, [*BASE_ARGS, "--text", "hello", "--html", "<p>hi</p>"])
        assert result.exit_code == 0, result.output
        assert "multipart/alternative" in result.stdout
        assert result.stdout.index("text/plain") < result.stdout.index("text/html")

    def test_repeated_recipients_and_hidden_bcc(self) -> None:
        """Recipients accumulate and bcc is left out of the rendering."""
        result = runner.invoke(
            app,
            [*BASE_ARGS, "--to", "c@x.com", "--cc", "d@x.com", "--bcc", "secret@x.com", "--text", "x"],
        )
        assert result.exit_code == 0, result.output
        assert "To: b@x.com, c@x.com" in result.stdout
        assert "Cc: d@x.com" in result.stdout
        assert "secret@x.com" not in result.stdout

    def test_summary_table(self) -> None:
        """``--summary`` prints a table instead of the raw message."""
        result = runner.invoke(app, [*BASE_ARGS, "--bcc", "h@x.com", "--html", "<p>hi</p>", "--summary"])
        assert result.exit_code == 0, result.output
        assert "Assembled Message" in result.stdout
        assert "text/html" in result.stdout
        assert "h@x.com" in result.stdout
        assert "Content-Type" not in result.stdout

    def test_config_headers_applied(self, tmp_path: Path) -> None:
        """Headers from the config file are added to the rendering."""
        config = tmp_path / "simplemail.conf.yml"
        config.write_text("mail:\n  headers:\n    X-Mailer: simplemail-cli\n", encoding="utf-8")
        result = runner.invoke(app, [*BASE_ARGS, "--text", "x", "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "X-Mailer: simplemail-cli" in result.stdout

    def test_invalid_address_exits_with_error(self) -> None:
        """An unparseable address exits with code 1."""
        result = runner.invoke(app, ["preview", "--from", "not-an-email", "--to", "b@x.com", "--text", "x"])
        assert result.exit_code == 1
        assert "missing '@'" in result.output

    def test_missing_body_exits_with_error(self) -> None:
        """A message without body exits with code 1."""
        result = runner.invoke(app, BASE_ARGS)
        assert result.exit_code == 1
        assert "body is required" in result.output

    def test_missing_config_file_exits_with_error(self, tmp_path: Path) -> None:
        """A missing config file exits with code 1."""
        result = runner.invoke(app, [*BASE_ARGS, "--text", "x", "--config", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_reserved_config_header_exits_with_error(self, tmp_path: Path) -> None:
        """Config headers may not override reserved headers."""
        config = tmp_path / "simplemail.conf.yml"
        config.write_text("mail:\n  headers:\n    Bcc: leak@x.com\n", encoding="utf-8")
        result = runner.invoke(app, [*BASE_ARGS, "--text", "x", "--config", str(config)])
        assert result.exit_code == 1
        assert "Reserved header" in result.output

    def test_to_is_required(self) -> None:
        """Omitting ``--to`` is a usage error."""
        result = runner.invoke(app, ["preview", "--from", "a@x.com", "--text", "x"])
        assert result.exit_code == 2

    def test_output_uses_lf_line_endings(self) -> None:
        """Terminal output uses plain newlines rather than SMTP CRLF."""
        result = runner.invoke(app, [*BASE_ARGS, "--text", "hello"])
        assert result.exit_code == 0, result.output
        assert b"\r\n" not in result.stdout_bytes
        assert b"From: a@x.com\n" in result.stdout_bytes

    def test_multiline_subject_is_folded(self) -> None:
        """A subject containing a line break renders on one line."""
        result = runner.invoke(app, [*BASE_ARGS, "--subject", "a\nb", "--text", "x"])
        assert result.exit_code == 0, result.output
        assert "Subject: a b" in result.stdout

    def test_malformed_config_section_exits_with_error(self, tmp_path: Path) -> None:
        """A scalar ``mail`` section exits with code 1 instead of a traceback."""
        config = tmp_path / "simplemail.conf.yml"
        config.write_text("mail: oops\n", encoding="utf-8")
        result = runner.invoke(app, [*BASE_ARGS, "--text", "x", "--config", str(config)])
        assert result.exit_code == 1
        assert "mail must be a mapping" in result.output
