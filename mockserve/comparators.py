"""Comparators deciding whether a mock's expectation matches a request value."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from mockserve.model import distance_for, levenshtein


class ValueComparator(ABC):
    """Compares a value from a mock with a value from a request."""

    _label = ""

    @abstractmethod
    def matches(self, mock_value: Any, req_value: Any) -> bool:
        """Return True if the request value satisfies the mock value."""

    def name(self) -> str:
        return self._label

    def distance(self, mock_value: Any, req_value: Any) -> int:
        """How far apart the two values are; None stands for an absent value."""
        return distance_for(mock_value, req_value)


def _json_text(value: Any) -> str:
    if value is None:
        return ""
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _json_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict):
        return (
            isinstance(b, dict)
            and a.keys() == b.keys()
            and all(_json_equal(v, b[k]) for k, v in a.items())
        )
    if isinstance(a, list):
        return isinstance(b, list) and len(a) == len(b) and all(map(_json_equal, a, b))
    if isinstance(a, (int, float)):
        return isinstance(b, (int, float)) and type(a) is type(b) and a == b
    return a == b


def _json_includes(actual: Any, expected: Any) -> bool:
    if isinstance(expected, dict):
        return isinstance(actual, dict) and all(
            k in actual and _json_includes(actual[k], v) for k, v in expected.items()
        )
    if isinstance(expected, list):
        return (
            isinstance(actual, list)
            and len(actual) >= len(expected)
            and all(map(_json_includes, actual, expected))
        )
    return _json_equal(actual, expected)


class _JSONComparator(ValueComparator):
    def distance(self, mock_value: Any, req_value: Any) -> int:
        return levenshtein(_json_text(mock_value), _json_text(req_value))


class JSONExactMatchComparator(_JSONComparator):
    """The request's JSON must equal the mock's JSON exactly."""

    _label = "equals"

    def matches(self, mock_value: Any, req_value: Any) -> bool:
        return _json_equal(req_value, mock_value)


class JSONContainsMatchComparator(_JSONComparator):
    """The request's JSON must include the mock's JSON."""

    _label = "contains"

    def matches(self, mock_value: Any, req_value: Any) -> bool:
        return _json_includes(req_value, mock_value)


class StringExactMatchComparator(ValueComparator):
    _label = "equals"

    def __init__(self, case_sensitive: bool) -> None:
        self.case_sensitive = case_sensitive

    def matches(self, mock_value: str, req_value: str) -> bool:
        if self.case_sensitive:
            return mock_value == req_value
        return mock_value.lower() == req_value.lower()


class StringContainsMatchComparator(ValueComparator):
    _label = "contains"

    def __init__(self, case_sensitive: bool) -> None:
        self.case_sensitive = case_sensitive

    def matches(self, mock_value: str, req_value: str) -> bool:
        if self.case_sensitive:
            return mock_value in req_value
        return mock_value.lower() in req_value.lower()


class StringRegexMatchComparator(ValueComparator):
    _label = "matches regex"

    def matches(self, mock_value: "re.Pattern[str] | str", req_value: str) -> bool:
        pattern = mock_value if isinstance(mock_value, re.Pattern) else re.compile(mock_value)
        return pattern.search(req_value) is not None


class AnyValueComparator(ValueComparator):
    """Accepts any value."""

    _label = "any"

    def matches(self, mock_value: Any, req_value: Any) -> bool:
        return True

    def distance(self, mock_value: Any, req_value: Any) -> int:
        return 0


class FunctionMatchesRequestComparator(ValueComparator):
    """Calls a user supplied predicate with the request."""

    _label = "matches"

    def matches(self, mock_value: Any, req_value: Any) -> bool:
        return bool(mock_value(req_value))

    def distance(self, mock_value: Optional[Any], req_value: Optional[Any]) -> int:
        if mock_value is None:
            return 0
        if req_value is None:
            return 1
        return 0 if self.matches(mock_value, req_value) else 1