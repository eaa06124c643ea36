import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import build_request, run_from_config
from .constants import DEFAULT_CONFIG_PATH, Method
from .display import display_response
from .exceptions import XHttpError
from .interactive import InteractiveSession
from .models import RequestConfig

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("xhttp")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def fail(error: Exception) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


def parse_header_options(values: tuple[str, ...]) -> list[tuple[str, str]]:
    """Split ``key:value`` options, ignoring entries without a colon."""
    headers = []
    for item in values:
        key, sep, value = item.partition(":")
        if sep:
            headers.append((key.strip(), value.strip()))
    return headers


@click.group(invoke_without_command=True)
@click.version_option(package_name="xhttp")
@click.option("-v", "--verbose", is_flag=True, help="Log requests and failed checks")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Instant HTTP API testing suite."""
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(interactive)


@main.command()
def interactive():
    """Build and send requests from prompts (default)."""
    try:
        InteractiveSession(console=console).run()
    except XHttpError as e:
        fail(e)


@main.command()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True, help="TOML file with requests")
@click.option("-n", "--name", default=None, help="Only run the request with this name")
def run(config_path: str, name: str | None):
    """Run requests from a config file."""

    def announce(request_config: RequestConfig) -> None:
        console.print(f"\n[bold]Running:[/bold] {escape(request_config.name)}")

    try:
        run_from_config(
            config_path,
            name,
            on_start=announce,
            on_response=lambda response: display_response(response, console),
        )
    except XHttpError as e:
        fail(e)


@main.command("request")
@click.argument("method")
@click.argument("url")
@click.option("-H", "--header", multiple=True, help="Header in 'key:value' format")
@click.option("-b", "--body", default=None, help="Request body")
@click.option("-j", "--json", "is_json", is_flag=True, help="Send the body as JSON")
def request_cmd(method: str, url: str, header: tuple[str, ...], body: str | None, is_json: bool):
    """Send a single request."""
    try:
        parsed_method = Method(method.upper())
    except ValueError:
        err_console.print(f"Invalid method: {escape(method)}")
        sys.exit(1)

    try:
        response = build_request(parsed_method, url, parse_header_options(header), body, is_json).send()
    except XHttpError as e:
        fail(e)
    else:
        display_response(response, console)
