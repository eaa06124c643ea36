import json
import logging
import re
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Self

import httpx
from pydantic import BaseModel

from .constants import DEFAULT_TIMEOUT, JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE, Method
from .exceptions import InvalidUrlError, JsonError, RequestError
from .response import Response
from .utils import is_visible_header_value

logger = logging.getLogger(__name__)

# RFC 9110 token
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

_ALLOWED_SCHEMES = ("http", "https")


def _is_valid_header(key: str, value: str) -> bool:
    return bool(_HEADER_NAME_RE.match(key)) and is_visible_header_value(value)


def _replace_pair(items: tuple[tuple[str, str], ...], key: str, value: str, *, ignore_case: bool) -> tuple[tuple[str, str], ...]:
    def same(other: str) -> bool:
        return other.lower() == key.lower() if ignore_case else other == key

    return (*((k, v) for k, v in items if not same(k)), (key, value))


@dataclass(frozen=True)
class Request:
    """An immutable HTTP request description.

    Builder methods never modify the instance they are called on; each one
    returns an updated copy, so a partially configured request can be shared
    and extended independently::

        base = Request.get("https://api.example.com/users").header("Accept", "application/json")
        first_page = base.query("page", "1")
        response = first_page.send().expect_status(200)
    """

    method: Method
    url: str
    header_items: tuple[tuple[str, str], ...] = ()
    content: bytes | None = None
    params: tuple[tuple[str, str], ...] = ()
    timeout_seconds: float | None = DEFAULT_TIMEOUT
    allow_redirects: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", Method(str(self.method).upper()))

    @classmethod
    def get(cls, url: str) -> Self:
        return cls(Method.GET, url)

    @classmethod
    def post(cls, url: str) -> Self:
        return cls(Method.POST, url)

    @classmethod
    def put(cls, url: str) -> Self:
        return cls(Method.PUT, url)

    @classmethod
    def delete(cls, url: str) -> Self:
        return cls(Method.DELETE, url)

    @classmethod
    def patch(cls, url: str) -> Self:
        return cls(Method.PATCH, url)

    @classmethod
    def head(cls, url: str) -> Self:
        return cls(Method.HEAD, url)

    @classmethod
    def options(cls, url: str) -> Self:
        return cls(Method.OPTIONS, url)

    def header(self, key: str, value: str) -> Self:
        """Set a header, replacing any previous value under the same case-insensitive name.

        Names that are not valid HTTP tokens and values with control or non-ASCII
        characters are dropped without raising.
        """
        if not _is_valid_header(key, value):
            logger.warning(f"Dropping invalid header {key!r}")
            return self
        return replace(self, header_items=_replace_pair(self.header_items, key, value, ignore_case=True))

    def headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Self:
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        request = self
        for key, value in pairs:
            request = request.header(key, value)
        return request

    def get_header(self, key: str) -> str | None:
        for k, v in self.header_items:
            if k.lower() == key.lower():
                return v
        return None

    def json(self, body: Any) -> Self:
        """Serialize ``body`` as the JSON payload and set ``Content-Type: application/json``.

        Raises:
            JsonError: If ``body`` cannot be serialized.
        """
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json")
        try:
            payload = json.dumps(body, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise JsonError(str(e)) from None
        return self.body(payload).header("Content-Type", JSON_CONTENT_TYPE)

    def body(self, body: bytes | str) -> Self:
        if isinstance(body, str):
            body = body.encode("utf-8")
        return replace(self, content=bytes(body))

    def text(self, text: str) -> Self:
        return self.body(text).header("Content-Type", TEXT_CONTENT_TYPE)

    def query(self, key: str, value: str) -> Self:
        return replace(self, params=_replace_pair(self.params, key, value, ignore_case=False))

    def timeout(self, duration: float | timedelta) -> Self:
        """Set the request timeout.

        Raises:
            ValueError: If ``duration`` is zero or negative.
        """
        if isinstance(duration, timedelta):
            duration = duration.total_seconds()
        if duration <= 0:
            raise ValueError(f"Timeout must be greater than 0, got {duration}")
        return replace(self, timeout_seconds=float(duration))

    def no_timeout(self) -> Self:
        return replace(self, timeout_seconds=None)

    def follow_redirects(self, follow: bool) -> Self:
        return replace(self, allow_redirects=follow)

    def build_url(self) -> httpx.URL:
        """Parse the target URL and append the query parameters.

        Raises:
            InvalidUrlError: If the URL is malformed, relative or not http(s).
        """
        try:
            url = httpx.URL(self.url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidUrlError(str(e)) from None

        if not url.scheme:
            raise InvalidUrlError(f"relative URL without a base: '{self.url}'")
        if url.scheme not in _ALLOWED_SCHEMES:
            raise InvalidUrlError(f"unsupported scheme '{url.scheme}' in '{self.url}'")
        if not url.host:
            raise InvalidUrlError(f"empty host in '{self.url}'")

        for key, value in self.params:
            url = url.copy_add_param(key, value)
        return url

    def send(self) -> Response:
        """Issue the request and block until the whole response is received.

        Raises:
            InvalidUrlError: If the URL cannot be parsed.
            RequestError: On any transport failure, including timeout expiry.
        """
        url = self.build_url()
        logger.info(f"Sending {self.method} {url}")

        with httpx.Client(follow_redirects=self.allow_redirects) as client:
            try:
                start = time.perf_counter()
                response = client.request(
                    self.method.value,
                    url,
                    headers=list(self.header_items),
                    content=self.content,
                    timeout=self.timeout_seconds,
                )
                duration = timedelta(seconds=time.perf_counter() - start)
            except httpx.TimeoutException as e:
                raise RequestError(f"request timed out: {e}") from None
            except httpx.ConnectError as e:
                raise RequestError(f"connection error: {e}") from None
            except httpx.HTTPError as e:
                raise RequestError(str(e)) from None

        logger.info(f"Received {response.status_code} from {url} in {duration.total_seconds():.3f}s")
        return Response.from_httpx(response, duration)
