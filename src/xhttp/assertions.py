"""Value comparison helpers backing the response assertion chain."""

from pydantic import JsonValue


def json_values_match(actual: JsonValue, expected: JsonValue) -> bool:
    """Compare two decoded JSON values structurally.

    Scalars must share both variant and value: ``True`` never matches ``1`` and
    ``1`` never matches ``1.0``. Arrays are compared position by position,
    objects ignore key order.
    """
    match actual, expected:
        case (bool(), _) | (_, bool()):
            return type(actual) is type(expected) and actual == expected
        case (int(), int()) | (float(), float()) | (str(), str()):
            return actual == expected
        case None, None:
            return True
        case list(), list():
            return len(actual) == len(expected) and all(json_values_match(a, e) for a, e in zip(actual, expected))
        case dict(), dict():
            return len(actual) == len(expected) and all(key in expected and json_values_match(value, expected[key]) for key, value in actual.items())
        case _:
            return False


def matches_pattern(value: str, pattern: str) -> bool:
    """Match ``value`` against a glob where ``*`` stands for any run of characters.

    Without a ``*`` the pattern must equal the value. Otherwise the leading
    fragment is a required prefix, the trailing fragment a required suffix and
    every fragment in between must appear in order after the prefix.
    """
    if "*" not in pattern:
        return value == pattern

    parts = pattern.split("*")
    last = len(parts) - 1
    pos = 0

    for i, part in enumerate(parts):
        if not part:
            continue
        if i == 0:
            if not value.startswith(part):
                return False
            pos += len(part)
        elif i == last:
            if not value.endswith(part):
                return False
        else:
            found = value.find(part, pos)
            if found == -1:
                return False
            pos = found + len(part)

    return True
