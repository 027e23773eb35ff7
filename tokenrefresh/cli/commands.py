"""CLI commands for tokenrefresh."""

import functools
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from tokenrefresh import __logo__, __version__
from tokenrefresh.auth.claude.client import exchange_refresh_token
from tokenrefresh.auth.claude.constants import DEFAULT_TIMEOUT_SEC, OUTPUT_ENV_VAR
from tokenrefresh.auth.claude.flow import refresh_if_needed
from tokenrefresh.auth.claude.reporting import FileOutputSink, sink_from_env

app = typer.Typer(
    name="tokenrefresh",
    help=f"{__logo__} tokenrefresh - Refresh Claude OAuth credentials before they expire",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _print_status(message: str) -> None:
    # Server bodies end up in these lines, so markup is off.
    style = "red" if message.startswith("✗") else "green" if message.startswith("✓") else None
    console.print(message, style=style, markup=False, highlight=False)


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} tokenrefresh v{__version__}")
        raise typer.Exit()


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def main(
    ctx: typer.Context,
    credentials_path: str = typer.Argument(None, help="Path to the credentials.json file"),
    output_file: str = typer.Option(
        None,
        "--output-file",
        help=f"File to append refresh status to (defaults to ${OUTPUT_ENV_VAR})",
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT_SEC,
        "--timeout",
        envvar="TOKENREFRESH_TIMEOUT",
        help="Token endpoint timeout in seconds",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    version: bool = typer.Option(
        None, "--version", callback=version_callback, is_eager=True
    ),
):
    """Refresh the OAuth token in CREDENTIALS_PATH if it expires within the hour."""
    if not credentials_path:
        console.print(ctx.get_usage(), markup=False, highlight=False)
        console.print("  credentials-path    Path to the credentials.json file", markup=False)
        raise typer.Exit(1)

    _setup_logging(verbose)
    sink = FileOutputSink(output_file) if output_file else sink_from_env()

    outcome = refresh_if_needed(
        credentials_path,
        exchange=functools.partial(exchange_refresh_token, timeout=timeout),
        sink=sink,
        on_status=_print_status,
    )
    if not outcome.ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
