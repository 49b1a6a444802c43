"""Helpers for comparing string mappings such as headers or query parameters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional


def contains_entry(mapping: Mapping[Any, Any], key: Any, value: Any) -> bool:
    """Return True if ``mapping`` holds ``key`` with exactly ``value``."""
    return any(k == key and v == value for k, v in mapping.items())


def contains(mapping: Mapping[Any, Any], other: Mapping[Any, Any]) -> bool:
    """Return True if every entry of ``other`` is also present in ``mapping``."""
    return all(contains_entry(mapping, k, v) for k, v in other.items())


def contains_entry_with_case_insensitive_key(
    mapping: Mapping[str, str], key: str, value: str
) -> bool:
    """Like :func:`contains_entry`, but keys are compared without regard to case."""
    key_lc = key.lower()
    return any(k.lower() == key_lc and v == value for k, v in mapping.items())


def contains_with_case_insensitive_key(
    mapping: Mapping[str, str], other: Mapping[str, str]
) -> bool:
    """Like :func:`contains`, but keys are compared without regard to case."""
    return all(
        contains_entry_with_case_insensitive_key(mapping, k, v) for k, v in other.items()
    )


def contains_case_insensitive_key(mapping: Mapping[str, str], key: str) -> bool:
    """Return True if ``mapping`` has ``key`` when case is ignored."""
    key_lc = key.lower()
    return any(k.lower() == key_lc for k in mapping)


def get_case_insensitive(mapping: Mapping[str, str], key: str) -> Optional[str]:
    """Return the value stored under ``key`` ignoring case, or None."""
    key_lc = key.lower()
    return next((v for k, v in mapping.items() if k.lower() == key_lc), None)