"""HTTP request construction and chainable response assertions."""

from .assertions import json_values_match, matches_pattern
from .constants import Method
from .exceptions import (
    AssertionFailedError,
    ConfigError,
    FieldMismatchError,
    HeaderMismatchError,
    HeaderNotFoundError,
    InteractiveError,
    InvalidUrlError,
    IoError,
    JsonError,
    NotJsonError,
    PathNotFoundError,
    RequestError,
    StatusMismatchError,
    TomlError,
    XHttpError,
)
from .request import Request
from .response import Response
from .utils import MISSING, extract_json_path

__all__ = [
    "MISSING",
    "AssertionFailedError",
    "ConfigError",
    "FieldMismatchError",
    "HeaderMismatchError",
    "HeaderNotFoundError",
    "InteractiveError",
    "InvalidUrlError",
    "IoError",
    "JsonError",
    "Method",
    "NotJsonError",
    "PathNotFoundError",
    "Request",
    "RequestError",
    "Response",
    "StatusMismatchError",
    "TomlError",
    "XHttpError",
    "extract_json_path",
    "json_values_match",
    "matches_pattern",
]
