import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, NoReturn, Self, TypeVar

import httpx
from pydantic import JsonValue, TypeAdapter, ValidationError

from .assertions import json_values_match, matches_pattern
from .constants import JSON_CONTENT_TYPE
from .exceptions import (
    AssertionFailedError,
    FieldMismatchError,
    HeaderMismatchError,
    HeaderNotFoundError,
    JsonError,
    NotJsonError,
    PathNotFoundError,
    StatusMismatchError,
    XHttpError,
)
from .utils import MISSING, dump_json, extract_json_path, is_visible_header_value, load_json

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Response:
    """A fully received HTTP response.

    Every ``expect_*`` and ``assert_*`` method returns the response itself when the
    check passes and raises a subclass of :class:`XHttpError` when it fails, so
    checks can be chained and the chain stops at the first failure::

        response.expect_status(200).expect_json().assert_field("user.name", "John")
    """

    status: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body_bytes: bytes = b""
    duration: timedelta = field(default_factory=timedelta)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            object.__setattr__(self, "headers", httpx.Headers(self.headers))

    @classmethod
    def from_httpx(cls, response: httpx.Response, duration: timedelta) -> Self:
        return cls(
            status=response.status_code,
            headers=httpx.Headers(response.headers),
            body_bytes=response.content,
            duration=duration,
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_error(self) -> bool:
        return 400 <= self.status < 600

    def header(self, key: str) -> str | None:
        """Case-insensitive header lookup.

        ``None`` when the header is absent or its value is not visible ASCII text.
        """
        value = self.headers.get(key)
        if value is None or not is_visible_header_value(value):
            return None
        return value

    def text(self) -> str:
        try:
            return self.body_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AssertionFailedError(f"Response body is not valid UTF-8: {e}") from None

    def json(self, shape: type[T] | None = None) -> T | Any:
        """Decode the body as JSON.

        Args:
            shape: Optional target type (a pydantic model, dataclass, ``list[int]``...)
                the decoded document is validated into.

        Raises:
            AssertionFailedError: If the body is not UTF-8.
            JsonError: If the body is not strict JSON or does not fit ``shape``.
        """
        try:
            data = load_json(self.text())
        except ValueError as e:
            raise JsonError(str(e)) from None

        if shape is None:
            return data

        try:
            return TypeAdapter(shape).validate_python(data)
        except ValidationError as e:
            raise JsonError(str(e)) from None

    def json_value(self) -> JsonValue:
        return self.json()

    def _fail(self, error: XHttpError) -> NoReturn:
        logger.debug(f"Check failed on {self.status} response: {error}")
        raise error

    def expect_status(self, expected: int) -> Self:
        if self.status != expected:
            self._fail(StatusMismatchError(expected, self.status))
        return self

    def expect_success(self) -> Self:
        if not self.is_success:
            self._fail(AssertionFailedError(f"Expected success status, got {self.status}"))
        return self

    def expect_error(self) -> Self:
        if not self.is_error:
            self._fail(AssertionFailedError(f"Expected error status, got {self.status}"))
        return self

    def expect_json(self) -> Self:
        content_type = self.header("content-type") or "unknown"
        if JSON_CONTENT_TYPE not in content_type:
            self._fail(NotJsonError(content_type))

        self.json_value()
        return self

    def expect_text(self) -> Self:
        self.text()
        return self

    def expect_body_contains(self, text: str) -> Self:
        if text not in self.text():
            self._fail(AssertionFailedError(f"Expected body to contain '{text}', but it didn't"))
        return self

    def expect_header(self, key: str, expected: str) -> Self:
        actual = self.header(key)
        if actual is None:
            self._fail(HeaderNotFoundError(key))
        if actual != expected:
            self._fail(HeaderMismatchError(key, expected, actual))
        return self

    def expect_header_matches(self, key: str, pattern: str) -> Self:
        """Like :meth:`expect_header` but ``pattern`` may contain ``*`` wildcards."""
        actual = self.header(key)
        if actual is None:
            self._fail(HeaderNotFoundError(key))
        if not matches_pattern(actual, pattern):
            self._fail(HeaderMismatchError(key, pattern, actual))
        return self

    def expect_content_type(self, content_type: str) -> Self:
        return self.expect_header("content-type", content_type)

    def _lookup(self, path: str) -> JsonValue:
        value = extract_json_path(self.json_value(), path)
        if value is MISSING:
            self._fail(PathNotFoundError(path))
        return value

    def assert_field(self, path: str, expected: JsonValue) -> Self:
        actual = self._lookup(path)
        if not json_values_match(actual, expected):
            self._fail(FieldMismatchError(path, dump_json(expected), dump_json(actual)))
        return self

    def assert_field_matches(self, path: str, pattern: str) -> Self:
        """Check that the string at ``path`` matches a ``*`` glob pattern."""
        actual = self._lookup(path)
        if not isinstance(actual, str) or not matches_pattern(actual, pattern):
            self._fail(FieldMismatchError(path, dump_json(pattern), dump_json(actual)))
        return self

    def assert_field_exists(self, path: str) -> Self:
        self._lookup(path)
        return self

    def assert_array_length(self, path: str, expected_length: int) -> Self:
        array = extract_json_path(self.json_value(), path)
        if not isinstance(array, list):
            self._fail(AssertionFailedError(f"Path '{path}' is not an array"))
        if len(array) != expected_length:
            self._fail(AssertionFailedError(f"Array at '{path}' expected length {expected_length}, got {len(array)}"))
        return self
