"""Field-name normalization for service responses.

The service may answer in camelCase (``regionCount``) or snake_case
(``region_count``). Every response model runs its raw mapping through
canonical_fields() before validation, so this module is the single place
that decides how the two conventions combine.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_camel


def canonical_key(key: str) -> str:
    """camelCase form of a wire key; keys without underscores are unchanged.

    Example:
        >>> canonical_key("region_count")
        'regionCount'
        >>> canonical_key("regionCount")
        'regionCount'
    """
    if "_" not in key:
        return key
    return to_camel(key)


def canonical_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite the keys of one response object to camelCase.

    When both conventions are present for the same field, the camelCase
    value wins regardless of key order. Only this object's own keys are
    rewritten; nested objects are normalized by their own models, and
    mapping-valued fields keyed by palette id are left untouched.

    Args:
        payload: Raw decoded JSON object.

    Returns:
        New dict keyed by canonical names.
    """
    out: dict[str, Any] = {}
    explicit: set[str] = set()
    for key, value in payload.items():
        name = canonical_key(key)
        if name == key:
            out[name] = value
            explicit.add(name)
        elif name not in explicit:
            out[name] = value
    return out
