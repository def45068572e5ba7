"""Command-line entry point: ``pooppdf [options] <url>``.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (POOPPDF_* with __) -> CLI flags.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pooppdf import __version__
from pooppdf.models.request import DEFAULT_OUTPUT_PATH

APP_HELP = "Generate a PDF of a webpage using Chrome in headless mode."

EXAMPLES = """\b
Examples:

  $ pooppdf "http://localhost:3000/dashboard/?print=1&token=f8s3h482s"
  $ pooppdf --selector "div.header" "http://localhost:3000/dashboard/?print=1&token=f8s3h482s"
  $ pooppdf --selector "div.header" --path dashboard.pdf "http://localhost:3000/dashboard/?print=1&token=f8s3h482s"
  $ pooppdf --selector "div.header" --path dashboard.pdf "http://localhost:3000/dashboard/?print=1&token=f8s3h482s" -n -t "Dashboard"
  $ pooppdf --selector "div.header" --path dashboard.pdf "http://localhost:3000/dashboard/?print=1&token=f8s3h482s" -n -t "Dashboard" -l ../Documents/pooppdf.log
"""

LOGGING_FLAGS = ("-l", "--enable-logging")

app = typer.Typer(
    add_completion=False,
    help=APP_HELP,
    rich_markup_mode=None,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)


def normalize_argv(args: list[str], default_log_file: str) -> list[str]:
    """Give a bare ``--enable-logging`` flag its default path.

    ``-l/--enable-logging`` takes an optional value: when it is the last
    argument or is followed by another option, *default_log_file* is
    inserted after it. A following non-option argument is taken as the path.
    """
    normalized: list[str] = []
    for i, arg in enumerate(args):
        if arg == "--":
            normalized.extend(args[i:])
            break
        normalized.append(arg)
        if arg in LOGGING_FLAGS:
            following = args[i + 1] if i + 1 < len(args) else None
            if following is None or following.startswith("-"):
                normalized.append(default_log_file)
    return normalized


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pooppdf {__version__}")
        raise typer.Exit()


@app.command(epilog=EXAMPLES)
def convert(
    url: Optional[str] = typer.Argument(None, metavar="<url>", show_default=False, help="The page to convert."),
    selector: Optional[str] = typer.Option(
        None,
        "--selector",
        "-s",
        help="Query selector for an element whose existence in DOM will be checked prior to generating the PDF.",
    ),
    path: Path = typer.Option(
        Path(DEFAULT_OUTPUT_PATH),
        "--path",
        "-p",
        help="The file path to save the PDF to. Relative paths are resolved against the current working directory.",
    ),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Title to show in the header of every page."),
    page_numbers: bool = typer.Option(False, "--page-numbers", "-n", help="Show page numbers in the footer."),
    enable_logging: Optional[str] = typer.Option(
        None,
        *LOGGING_FLAGS,
        metavar="[path]",
        help="Enable logging. An optional path can be given for the logfile (default: pooppdf.log).",
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Generate a PDF of a webpage using Chrome in headless mode."""
    from pooppdf.capture.pipeline import CapturePipeline
    from pooppdf.exceptions import ConfigurationError
    from pooppdf.logging_config import configure_logging, flush_logging
    from pooppdf.models.request import CaptureRequest
    from pooppdf.settings import get_settings

    try:
        request = CaptureRequest.build(
            url,
            output_path=path,
            selector=selector,
            title=title,
            show_page_numbers=page_numbers,
        )
    except ConfigurationError as exc:
        err_console.print(str(exc), markup=False, highlight=False)
        raise typer.Exit(code=1)

    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.logging.level
    try:
        log = configure_logging(enable_logging, level=level)
    except OSError as exc:
        err_console.print(f"Cannot open log file {enable_logging}: {exc}", markup=False, highlight=False)
        raise typer.Exit(code=1)
    try:
        result = asyncio.run(CapturePipeline(settings).run(request, log))
    finally:
        flush_logging(log)

    if not result.success:
        err_console.print(f"Failed: {result.error_message}", markup=False, highlight=False)
        raise typer.Exit(code=1)
    console.print(f"PDF written to {result.output_path}", markup=False, highlight=False)


def run() -> None:
    """Console-script entry point."""
    from pooppdf.settings import get_settings

    args = normalize_argv(sys.argv[1:], get_settings().logging.default_file)
    app(args=args, prog_name="pooppdf")


if __name__ == "__main__":
    run()
