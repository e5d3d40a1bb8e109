"""Internal helpers for mutating telemetry items."""

from __future__ import annotations

import base64
import uuid
from collections.abc import Callable, MutableMapping
from typing import Any


def is_string(value: Any) -> bool:
    """Return True if value is a str instance."""
    return isinstance(value, str)


def get_set_value(
    target: MutableMapping[str, Any] | None,
    field: str,
    default: MutableMapping[str, Any] | None = None,
) -> MutableMapping[str, Any] | None:
    """Return the mapping stored at ``target[field]``, creating it if absent.

    Args:
        target: Mapping to read from (None is tolerated)
        field: Key of the nested mapping
        default: Value attached when the key is missing (defaults to a new dict)

    Returns:
        The existing or newly attached mapping, or None if target is None

    Examples:
        >>> item = {}
        >>> get_set_value(item, "ext")
        {}
        >>> item
        {'ext': {}}
    """
    if target is None:
        return None

    value = target.get(field)
    if value is None:
        value = {} if default is None else default
        target[field] = value
    if not isinstance(value, MutableMapping):
        return None
    return value


def set_value(
    target: MutableMapping[str, Any] | None,
    field: str,
    value: Any,
    check: Callable[[Any], bool] | None = None,
) -> None:
    """Write ``value`` into ``target[field]`` when it is present and passes check.

    Args:
        target: Mapping to write into (None is tolerated)
        field: Key to write
        value: Candidate value; None is never written
        check: Optional predicate the value must satisfy

    Examples:
        >>> tags = {}
        >>> set_value(tags, "ver", 12, is_string)
        >>> tags
        {}
        >>> set_value(tags, "ver", "1.2", is_string)
        >>> tags
        {'ver': '1.2'}
    """
    if target is None or value is None:
        return
    if check is not None and not check(value):
        return
    target[field] = value


def remove_empty(target: MutableMapping[str, Any] | None, name: str) -> None:
    """Delete ``target[name]`` if it holds a mapping with no keys."""
    if not target:
        return
    value = target.get(name)
    if isinstance(value, MutableMapping) and len(value) == 0:
        del target[name]


def new_id() -> str:
    """Generate a short random identifier (22 url-safe base64 characters)."""
    return base64.urlsafe_b64encode(uuid.uuid4().bytes).decode("ascii").rstrip("=")
