"""
Helper functions for index documents.

This module contains small utilities shared by the planner and the
collection gateways to compare and name index definitions.
"""

from typing import Any


def normalize_keys(
    keys: dict[str, Any] | list[tuple[str, Any]],
) -> list[tuple[str, Any]]:
    """
    Normalize index keys to a consistent format.

    Args:
        keys: Index keys as dict or list of tuples

    Returns:
        List of (field_name, direction) tuples
    """
    if isinstance(keys, dict):
        return [(k, v) for k, v in keys.items()]
    return list(keys)


def keys_to_dict(keys: dict[str, Any] | list[tuple[str, Any]]) -> dict[str, Any]:
    """
    Convert index keys to dictionary format for comparison.

    Args:
        keys: Index keys as dict or list of tuples

    Returns:
        Dictionary representation of keys
    """
    if isinstance(keys, dict):
        return keys
    return {k: v for k, v in keys}


def default_index_name(keys: dict[str, Any] | list[tuple[str, Any]]) -> str:
    """
    Build the name MongoDB gives an index created without an explicit name.

    Args:
        keys: Index keys as dict or list of tuples

    Returns:
        Name such as ``"email_1"`` or ``"created_at_-1"``
    """
    return "_".join(f"{k}_{v}" for k, v in normalize_keys(keys))


def index_options_match(
    existing: dict[str, Any],
    expected: dict[str, Any],
) -> bool:
    """
    Check whether two index documents describe the same index.

    The name is ignored; keys and every other option must be equal, with an
    absent ``unique`` treated as ``False``.

    Args:
        existing: Index document already present
        expected: Index document being requested

    Returns:
        True if both documents describe the same index
    """
    if keys_to_dict(existing.get("key", {})) != keys_to_dict(expected.get("key", {})):
        return False
    option_names = (set(existing) | set(expected)) - {"key", "name", "v"}
    for option in option_names:
        default = False if option == "unique" else None
        if existing.get(option, default) != expected.get(option, default):
            return False
    return True


def is_id_index(keys: dict[str, Any] | list[tuple[str, Any]]) -> bool:
    """
    Check if index keys target the _id field (which MongoDB creates automatically).

    Args:
        keys: Index keys to check

    Returns:
        True if this is an _id index
    """
    normalized = normalize_keys(keys)
    return len(normalized) == 1 and normalized[0][0] == "_id"
