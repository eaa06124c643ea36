from enum import StrEnum


class Method(StrEnum):
    """HTTP methods supported by the request builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


DEFAULT_TIMEOUT = 30.0
DEFAULT_CONFIG_PATH = "x-http.toml"

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"

# methods the interactive prompt asks a body for
BODY_METHODS = frozenset({Method.POST, Method.PUT, Method.PATCH})
