class XHttpError(Exception):
    """Base class for every error raised by xhttp."""


class RequestError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"HTTP request failed: {message}")


class InvalidUrlError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"Invalid URL: {message}")


class JsonError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"JSON parsing error: {message}")


class AssertionFailedError(XHttpError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Assertion failed: {message}")


class HeaderNotFoundError(AssertionFailedError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Header '{key}' not found")


class StatusMismatchError(XHttpError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Status code {expected} expected, got {actual}")


class HeaderMismatchError(XHttpError):
    def __init__(self, key: str, expected: str, actual: str):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"Header '{key}' expected value '{expected}', got '{actual}'")


class NotJsonError(XHttpError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Expected JSON response, got content-type: {content_type}")


class PathNotFoundError(XHttpError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"JSON path '{path}' not found")


class FieldMismatchError(XHttpError):
    def __init__(self, field: str, expected: str, actual: str):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Field '{field}' expected value {expected}, got {actual}")


class IoError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"IO error: {message}")


class ConfigError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class TomlError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"TOML parsing error: {message}")


class InteractiveError(XHttpError):
    def __init__(self, message: str):
        super().__init__(f"Interactive prompt error: {message}")
