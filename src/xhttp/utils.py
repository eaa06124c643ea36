import json
import re
from typing import Any, Final

from pydantic import JsonValue


class _Missing:
    """Marker for a JSON path that resolves to nothing."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def _parse_index(segment: str, bracket: int) -> int | None:
    if not segment.endswith("]"):
        return None
    index_str = segment[bracket + 1 : -1]
    if not (index_str.isascii() and index_str.isdigit()):
        return None
    return int(index_str)


def extract_json_path(root: JsonValue, path: str) -> JsonValue | _Missing:
    """Resolve a dotted path such as ``items[0].name`` inside a decoded JSON document.

    Each dot-separated segment is an object key, optionally followed by a single
    ``[n]`` array index. The returned value is the object stored inside ``root``
    (no copy). A missing key, a non-container or an out-of-range index yields
    ``MISSING`` rather than raising, since ``None`` is a legitimate JSON value.
    """
    current: Any = root

    for segment in path.split("."):
        bracket = segment.find("[")
        if bracket == -1:
            if not isinstance(current, dict) or segment not in current:
                return MISSING
            current = current[segment]
            continue

        index = _parse_index(segment, bracket)
        if index is None:
            return MISSING

        field = segment[:bracket]
        if not isinstance(current, dict) or field not in current:
            return MISSING
        current = current[field]

        if not isinstance(current, list) or index >= len(current):
            return MISSING
        current = current[index]

    return current


# visible ASCII plus space and horizontal tab
_HEADER_VALUE_RE = re.compile(r"^[\t\x20-\x7e]*$")


def is_visible_header_value(value: str) -> bool:
    return bool(_HEADER_VALUE_RE.match(value))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def load_json(text: str) -> Any:
    """Decode ``text`` as strict JSON, rejecting ``NaN`` and ``Infinity``."""
    return json.loads(text, parse_constant=_reject_constant)


def dump_json(value: Any) -> str:
    """Compact single-line JSON rendering used in failure messages."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=repr)
