"""Unit tests for the pooppdf command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeout
from typer.testing import CliRunner

from pooppdf.cli.app import app, normalize_argv

runner = CliRunner()

URL = "http://localhost:3000/dashboard/?print=1&token=f8s3h482s"


@pytest.fixture()
def patched_session(monkeypatch, fake_session, tmp_path: Path):
    """Run CLI invocations against the fake browser inside *tmp_path*."""
    monkeypatch.setattr("pooppdf.capture.pipeline.BrowserSession", fake_session)
    monkeypatch.chdir(tmp_path)
    return fake_session


# ===================================================================
# normalize_argv
# ===================================================================


class TestNormalizeArgv:
    """Optional value for -l/--enable-logging."""

    def test_bare_flag_at_end_gets_default(self) -> None:
        assert normalize_argv([URL, "-l"], "pooppdf.log") == [URL, "-l", "pooppdf.log"]

    def test_bare_flag_before_option_gets_default(self) -> None:
        assert normalize_argv(["--enable-logging", "-n", URL], "pooppdf.log") == [
            "--enable-logging",
            "pooppdf.log",
            "-n",
            URL,
        ]

    def test_explicit_path_kept(self) -> None:
        args = ["-l", "../Documents/pooppdf.log", URL]
        assert normalize_argv(args, "pooppdf.log") == args

    def test_equals_form_untouched(self) -> None:
        args = ["--enable-logging=x.log", URL]
        assert normalize_argv(args, "pooppdf.log") == args

    def test_after_double_dash_untouched(self) -> None:
        args = ["--", "-l"]
        assert normalize_argv(args, "pooppdf.log") == args

    def test_no_logging_flag(self) -> None:
        assert normalize_argv([URL, "-n"], "pooppdf.log") == [URL, "-n"]


# ===================================================================
# Command
# ===================================================================


class TestConvertCommand:
    """End-to-end CLI behaviour with a fake browser."""

    def test_missing_url(self, patched_session) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 1
        assert "No url given!" in result.output
        assert patched_session.open_calls == 0

    def test_invalid_url(self, patched_session) -> None:
        result = runner.invoke(app, ["not a url"])
        assert result.exit_code == 1
        assert "absolute" in result.output
        assert patched_session.open_calls == 0

    def test_default_output_path(self, patched_session, tmp_path: Path) -> None:
        result = runner.invoke(app, [URL])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "output.pdf").read_bytes().startswith(b"%PDF")
        assert patched_session.close_calls == 1

    def test_options_reach_renderer(self, patched_session, fake_page, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            ["--selector", "div.header", "--path", "dashboard.pdf", URL, "-n", "-t", "Dashboard"],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "dashboard.pdf").exists()
        fake_page.evaluate.assert_awaited_once()
        assert fake_page.evaluate.call_args.args[1] == "div.header"
        kwargs = fake_page.pdf.call_args.kwargs
        assert '<h1 align="center">Dashboard</h1>' in kwargs["header_template"]
        assert "totalPages" in kwargs["footer_template"]

    def test_failure_exits_one_and_writes_nothing(self, patched_session, fake_page, tmp_path: Path) -> None:
        fake_page.wait_for_load_state.side_effect = PlaywrightTimeout("Timeout exceeded")

        result = runner.invoke(app, [URL])

        assert result.exit_code == 1
        assert "network idle" in result.output
        assert not (tmp_path / "output.pdf").exists()
        assert patched_session.close_calls == 1

    def test_logging_to_default_file(self, patched_session, tmp_path: Path) -> None:
        result = runner.invoke(app, normalize_argv([URL, "--enable-logging"], "pooppdf.log"))

        assert result.exit_code == 0, result.output
        text = (tmp_path / "pooppdf.log").read_text()
        assert "info: Generating PDF for URL : " + URL in text
        assert "info: PDF generated successfully!" in text

    def test_logging_records_errors(self, patched_session, fake_page, tmp_path: Path) -> None:
        fake_page.pdf.side_effect = PlaywrightTimeout("render crashed")

        result = runner.invoke(app, ["-l", "logs/run.log", URL])

        assert result.exit_code == 1
        text = (tmp_path / "logs" / "run.log").read_text()
        assert "error: PDF generation failed: render crashed" in text
        assert "PDF generated successfully!" not in text

    def test_unwritable_log_file(self, patched_session, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-l", str(tmp_path), URL])

        assert result.exit_code == 1
        assert "Cannot open log file" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert patched_session.open_calls == 0

    def test_logging_disabled_writes_no_file(self, patched_session, tmp_path: Path) -> None:
        result = runner.invoke(app, [URL])
        assert result.exit_code == 0
        assert not (tmp_path / "pooppdf.log").exists()

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("pooppdf ")

    def test_help_lists_options_and_examples(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for flag in ("--selector", "--path", "--title", "--page-numbers", "--enable-logging"):
            assert flag in result.output
        assert "Examples:" in result.output
