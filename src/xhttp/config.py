import logging
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import ValidationError

from .constants import Method
from .exceptions import ConfigError, IoError, JsonError, TomlError
from .models import Config, RequestConfig
from .request import Request
from .response import Response
from .utils import load_json

logger = logging.getLogger(__name__)


def parse_method(method: str) -> Method:
    try:
        return Method(method.upper())
    except ValueError:
        raise ConfigError(f"Invalid HTTP method: {method}") from None


def load_config(path: str | Path) -> Config:
    """Read and validate a TOML request collection.

    Raises:
        IoError: If the file cannot be read.
        TomlError: If the file is not valid TOML.
        ConfigError: If the document does not describe a valid collection.
    """
    path = Path(path)
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Failed to read config file '{path}': {e}") from None

    try:
        data = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as e:
        raise TomlError(f"Failed to parse config file '{path}': {e}") from None

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file '{path}': {e}") from None


def build_request(
    method: Method | str,
    url: str,
    headers: Iterable[tuple[str, str]] = (),
    body: str | None = None,
    is_json: bool = False,
) -> Request:
    """Assemble a request from already resolved user input.

    A JSON body is parsed first so malformed input fails before anything is sent.
    """
    request = Request(method, url).headers(headers)
    if body is None:
        return request

    if not is_json:
        return request.text(body)

    try:
        value = load_json(body)
    except ValueError as e:
        raise JsonError(str(e)) from None
    return request.json(value)


def build_request_from_config(config: Config, request_config: RequestConfig) -> Request:
    headers = [(key, config.substitute_variables(value)) for key, value in request_config.headers.items()]
    body = config.substitute_variables(request_config.body) if request_config.body is not None else None
    return build_request(
        parse_method(request_config.method),
        config.substitute_variables(request_config.url),
        headers,
        body,
        request_config.is_json,
    )


def run_from_config(
    path: str | Path,
    name: str | None = None,
    on_start: Callable[[RequestConfig], None] | None = None,
    on_response: Callable[[Response], None] | None = None,
) -> list[Response]:
    """Send the requests of a config file in order, stopping at the first failure.

    Args:
        path: TOML config file.
        name: Only run requests with this name.
        on_start: Called with each request entry before it is sent.
        on_response: Called with each received response.

    Returns:
        The responses, in config order.
    """
    config = load_config(path)

    selected = config.select(name)
    if not selected:
        suffix = f" with name '{name}'" if name is not None else ""
        raise ConfigError(f"No requests found{suffix}")

    responses = []
    for request_config in selected:
        logger.info(f"Running {request_config.name}")
        if on_start is not None:
            on_start(request_config)
        response = build_request_from_config(config, request_config).send()
        if on_response is not None:
            on_response(response)
        responses.append(response)

    return responses
