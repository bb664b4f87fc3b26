"""Field lookup and coercion helpers shared by every entity mapper."""

import json
import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from metaforge_sync.errors import MissingIdentifierError


def is_present(value: Any) -> bool:
    """False for None, blank strings and empty containers."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return bool(value)
    return True


def first_present(raw: Any, keys: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first key in `keys` that holds a present value."""
    if not isinstance(raw, Mapping):
        return default
    for key in keys:
        value = raw.get(key)
        if is_present(value):
            return value
    return default


def first_defined(raw: Any, keys: Iterable[str]) -> Any:
    """Like first_present, but only skips None (keeps 0, False and "")."""
    if not isinstance(raw, Mapping):
        return None
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def dig(raw: Any, *path: str) -> Any:
    """Follow nested mapping keys; None when any hop is missing."""
    current = raw
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def to_text(value: Any) -> str:
    """Stringify a scalar the way the API renders it (true/false, 3 not 3.0)."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, separators=(",", ":"))
    return str(value)


def to_string_list(value: Any) -> list[str]:
    """
    Normalize maybe-list, maybe-scalar, maybe-absent values to a list of
    non-empty strings. Never raises.
    """
    if not is_present(value):
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    result: list[str] = []
    for item in items:
        if not is_present(item):
            continue
        text = to_text(item)
        if text.strip():
            result.append(text)
    return result


def as_list(value: Any) -> list:
    """Sub-record containers: absent -> [], list -> list, anything else -> [value]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def to_number(value: Any) -> Optional[float]:
    """Numeric coercion; None for absent, unparseable or non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def resolve_identifier(raw: Any, keys: tuple[str, ...], kind: str) -> str:
    """Stable document id from the kind's identifier candidates."""
    value = first_present(raw, keys)
    if value is None:
        raise MissingIdentifierError(kind, keys)
    return to_text(value).strip()
