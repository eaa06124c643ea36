import logging
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from .config import build_request
from .constants import BODY_METHODS, Method
from .display import display_response
from .exceptions import InteractiveError, XHttpError
from .response import Response

logger = logging.getLogger(__name__)


class InteractiveSession:
    """Prompt for a request, send it, show the response, repeat.

    Errors from a single request are reported and the user is prompted again;
    a broken input stream ends the session.
    """

    def __init__(self, console: Console | None = None, on_response: Callable[[Response], None] | None = None):
        self.console = console or Console()
        self.on_response = on_response or (lambda response: display_response(response, self.console))

    def run(self) -> None:
        self.console.print("[bold]xhttp interactive mode[/bold]")
        self.console.print("Press Ctrl+C to exit\n")

        while True:
            try:
                if not self.prompt_and_execute():
                    break
            except InteractiveError:
                raise
            except XHttpError as e:
                logger.debug(f"Request failed: {e}")
                self.console.print(f"[red]Error:[/red] {escape(str(e))}")
            except KeyboardInterrupt:
                self.console.print()
                break

    def _ask(self, ask: Callable[..., str | bool], prompt: str, **kwargs) -> str | bool:
        try:
            return ask(prompt, console=self.console, **kwargs)
        except EOFError:
            raise InteractiveError("input stream closed") from None

    def prompt_and_execute(self) -> bool:
        method = self.prompt_method()
        url = self.prompt_url()
        headers = self.prompt_headers()
        body, is_json = self.prompt_body() if method in BODY_METHODS else (None, False)

        request = build_request(method, url, headers, body, is_json)

        self.console.print("\nSending request...\n")
        self.on_response(request.send())

        return self._ask(Confirm.ask, "\nMake another request?", default=True)

    def prompt_method(self) -> Method:
        choice = self._ask(Prompt.ask, "Select HTTP method", choices=[m.value for m in Method], default=Method.GET.value)
        return Method(choice)

    def prompt_url(self) -> str:
        return self._ask(Prompt.ask, "URL")

    def prompt_headers(self) -> list[tuple[str, str]]:
        headers = []
        while True:
            header = self._ask(Prompt.ask, "Header (key:value, or press Enter to skip)", default="", show_default=False)
            if not header:
                return headers

            key, sep, value = header.partition(":")
            if not sep:
                self.console.print("[red]Invalid header format. Use key:value[/red]")
                continue
            headers.append((key.strip(), value.strip()))

    def prompt_body(self) -> tuple[str | None, bool]:
        if not self._ask(Confirm.ask, "Include request body?", default=False):
            return None, False

        is_json = self._ask(Confirm.ask, "Is the body JSON?", default=True)
        body = self._ask(Prompt.ask, "JSON body" if is_json else "Body")
        return body, is_json
