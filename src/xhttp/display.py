"""Terminal rendering of responses.

Only reads :class:`~xhttp.response.Response` accessors; nothing here affects
request or assertion behaviour.
"""

import json

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.syntax import Syntax

from .constants import JSON_CONTENT_TYPE
from .exceptions import AssertionFailedError
from .response import Response

SYNTAX_THEME = "monokai"


def status_style(status: int) -> str:
    if 200 <= status < 300:
        return "green"
    if 300 <= status < 400:
        return "yellow"
    if status >= 400:
        return "red"
    return "white"


def format_duration(response: Response) -> str:
    return f"{response.duration.total_seconds() * 1000:.0f}ms"


def format_json(text: str) -> str | None:
    """Pretty-print ``text`` if it is JSON, ``None`` otherwise."""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except json.JSONDecodeError:
        return None


def display_response(response: Response, console: Console | None = None) -> None:
    console = console or Console()
    style = status_style(response.status)

    console.print(Rule(style="bright_blue"))
    console.print(f"[bold]Status:[/bold] [{style}]{response.status}[/{style}]")
    console.print(f"[bold]Duration:[/bold] {format_duration(response)}")

    console.print("\n[bold cyan]Headers:[/bold cyan]")
    for key, value in response.headers.items():
        console.print(f"  [green]{escape(key)}[/green]: {escape(value)}")

    try:
        text = response.text()
    except AssertionFailedError:
        console.print("\n[dim]Body: <binary data>[/dim]")
    else:
        console.print("\n[bold cyan]Body:[/bold cyan]")
        content_type = response.header("content-type") or ""
        formatted = format_json(text) if JSON_CONTENT_TYPE in content_type else None
        if formatted is not None:
            console.print(Syntax(formatted, "json", theme=SYNTAX_THEME, line_numbers=False))
        else:
            console.print(text, markup=False, highlight=False)

    console.print(Rule(style="bright_blue"))
