# =============================================================================
# Attribute Tree Utilities
# =============================================================================
# Helpers for the nested key/value trees that make up a Himalaya config:
#
#   - deep_merge: recursive merge where the later tree wins on conflicts
#   - compact: drop entries whose value is None
#   - merge_fragments: combine optional config fragments in order
#
# TOML has no null, so a None must never survive into a generated document.
# These functions never mutate their arguments; they always build new dicts.
# =============================================================================

from collections.abc import Iterable, Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Recursively merge `override` on top of `base`.

    On a key collision, two mappings are merged recursively. In every other
    case the override value replaces the base value, even when the base
    value is a mapping and the override is a scalar.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"c": 99, "d": 3}})
        {'a': 1, 'b': {'c': 99, 'd': 3}}
    """
    merged: dict[str, Any] = {key: _copy(value) for key, value in base.items()}

    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy(value)

    return merged


def compact(mapping: Mapping[str, Any], recursive: bool = True) -> dict[str, Any]:
    """
    Return a copy of `mapping` without None-valued entries.

    With `recursive` (the default) nested mappings are compacted too, and a
    nested mapping that only held None values is dropped as well. A mapping
    that was empty to begin with is kept.
    """
    result: dict[str, Any] = {}
    for key, value in mapping.items():
        if value is None:
            continue
        if recursive and isinstance(value, Mapping) and value:
            value = compact(value, recursive=True)
            if not value:
                continue
        result[key] = value
    return result


def merge_fragments(fragments: Iterable[Mapping[str, Any] | None]) -> dict[str, Any]:
    """
    Combine optional config fragments into one mapping.

    Absent fragments are passed as None and contribute nothing. Present
    fragments are null-pruned and deep-merged in order, so a later fragment
    wins on any key it shares with an earlier one.
    """
    result: dict[str, Any] = {}
    for fragment in fragments:
        if fragment is None:
            continue
        result = deep_merge(result, compact(fragment))
    return result


def _copy(value: Any) -> Any:
    """Copy nested mappings so merged trees never alias their inputs."""
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy(item) for item in value]
    return value
