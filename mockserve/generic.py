"""Generic matchers that combine a source, a target and a comparator."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from mockserve.comparators import ValueComparator
from mockserve.model import (
    HttpMockRequest,
    Mismatch,
    Reason,
    RequestRequirements,
    Tokenizer,
    diff_str,
)
from mockserve.transformers import Transformer

KeyValue = tuple[Any, Optional[Any]]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    if isinstance(value, re.Pattern):
        return value.pattern
    try:
        return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    except TypeError:
        return str(value)


class Matcher(ABC):
    """Checks one aspect of a request against a mock's requirements."""

    @abstractmethod
    def matches(self, req: HttpMockRequest, mock: RequestRequirements) -> bool:
        """Return True if the request satisfies this aspect of the mock."""

    @abstractmethod
    def distance(self, req: HttpMockRequest, mock: RequestRequirements) -> int:
        """How far the request is from satisfying this aspect of the mock."""

    @abstractmethod
    def mismatches(self, req: HttpMockRequest, mock: RequestRequirements) -> list[Mismatch]:
        """Describe every requirement of the mock that the request misses."""


@dataclass
class SingleValueMatcher(Matcher):
    """Compares each expected value of a mock with one value of the request."""

    entity_name: str
    source: Callable[[RequestRequirements], Optional[list[Any]]]
    target: Callable[[HttpMockRequest], Optional[Any]]
    comparator: ValueComparator
    transformer: Optional[Transformer] = None
    with_reason: bool = True
    diff_with: Optional[Tokenizer] = None
    weight: int = 1

    def _request_value(self, req: HttpMockRequest) -> Optional[Any]:
        value = self.target(req)
        if value is not None and self.transformer is not None:
            value = self.transformer.transform(value)
        return value

    def _unmatched(self, req_value: Optional[Any], mock_values: Optional[list[Any]]) -> list[Any]:
        if mock_values is None:
            return []
        if req_value is None:
            return list(mock_values)
        return [m for m in mock_values if not self.comparator.matches(m, req_value)]

    def matches(self, req: HttpMockRequest, mock: RequestRequirements) -> bool:
        return not self._unmatched(self._request_value(req), self.source(mock))

    def distance(self, req: HttpMockRequest, mock: RequestRequirements) -> int:
        req_value = self._request_value(req)
        return sum(
            self.comparator.distance(m, req_value) * self.weight
            for m in self._unmatched(req_value, self.source(mock))
        )

    def mismatches(self, req: HttpMockRequest, mock: RequestRequirements) -> list[Mismatch]:
        req_value = self._request_value(req)
        actual = _text(req_value)
        result = []
        for mock_value in self._unmatched(req_value, self.source(mock)):
            expected = _text(mock_value)
            reason = (
                Reason(
                    expected=expected,
                    actual=actual,
                    comparison=self.comparator.name(),
                    best_match=False,
                )
                if self.with_reason
                else None
            )
            diff = diff_str(expected, actual, self.diff_with) if self.diff_with else None
            result.append(
                Mismatch(
                    title=f"The {self.entity_name} does not match",
                    reason=reason,
                    diff=diff,
                )
            )
        return result


@dataclass
class MultiValueMatcher(Matcher):
    """Checks that every expected key (and value) of a mock is present in the request."""

    entity_name: str
    source: Callable[[RequestRequirements], Optional[list[KeyValue]]]
    target: Callable[[HttpMockRequest], Optional[list[KeyValue]]]
    key_comparator: ValueComparator
    value_comparator: ValueComparator
    key_transformer: Optional[Transformer] = None
    value_transformer: Optional[Transformer] = None
    with_reason: bool = True
    diff_with: Optional[Tokenizer] = None
    weight: int = 1

    def _mock_values(self, mock: RequestRequirements) -> list[KeyValue]:
        values = self.source(mock) or []
        result = []
        for key, value in values:
            if self.key_transformer is not None:
                key = self.key_transformer.transform(key)
            if value is not None and self.value_transformer is not None:
                value = self.value_transformer.transform(value)
            result.append((key, value))
        return result

    def _request_values(self, req: HttpMockRequest) -> list[KeyValue]:
        return self.target(req) or []

    def _pair_matches(self, sk: Any, sv: Any, tk: Any, tv: Any) -> bool:
        if not self.key_comparator.matches(sk, tk):
            return False
        if sv is None:
            return True
        if tv is None:
            return False
        return self.value_comparator.matches(sv, tv)

    def _unmatched(
        self, req_values: list[KeyValue], mock_values: list[KeyValue]
    ) -> list[KeyValue]:
        return [
            (sk, sv)
            for sk, sv in mock_values
            if not any(self._pair_matches(sk, sv, tk, tv) for tk, tv in req_values)
        ]

    def _best_match(
        self, sk: Any, sv: Optional[Any], req_values: list[KeyValue]
    ) -> Optional[KeyValue]:
        if not req_values:
            return None
        key_text = _text(sk)
        exact = next(((tk, tv) for tk, tv in req_values if _text(tk) == key_text), None)
        if exact is not None:
            return exact
        return min(
            req_values,
            key=lambda kv: self.key_comparator.distance(sk, kv[0])
            + self.value_comparator.distance(sv, kv[1]),
        )

    def matches(self, req: HttpMockRequest, mock: RequestRequirements) -> bool:
        return not self._unmatched(self._request_values(req), self._mock_values(mock))

    def distance(self, req: HttpMockRequest, mock: RequestRequirements) -> int:
        req_values = self._request_values(req)
        total = 0
        for key, value in self._unmatched(req_values, self._mock_values(mock)):
            best = self._best_match(key, value, req_values)
            best_key, best_value = best if best is not None else (None, None)
            total += (
                self.key_comparator.distance(key, best_key)
                + self.value_comparator.distance(value, best_value)
            ) * self.weight
        return total

    def mismatches(self, req: HttpMockRequest, mock: RequestRequirements) -> list[Mismatch]:
        req_values = self._request_values(req)
        result = []
        for key, value in self._unmatched(req_values, self._mock_values(mock)):
            if value is None:
                title = (
                    f"Expected {self.entity_name} with name '{_text(key)}' to be present "
                    "in the request but it wasn't."
                )
            else:
                title = (
                    f"Expected {self.entity_name} with name '{_text(key)}' and value "
                    f"'{_text(value)}' to be present in the request but it wasn't."
                )
            best = self._best_match(key, value, req_values)
            reason = None
            if best is not None:
                best_key, best_value = best
                reason = Reason(
                    expected=_text(key) if value is None else f"{_text(key)}={_text(value)}",
                    actual=(
                        _text(best_key)
                        if best_value is None
                        else f"{_text(best_key)}={_text(best_value)}"
                    ),
                    comparison=(
                        f"key={self.key_comparator.name()}, "
                        f"value={self.value_comparator.name()}"
                    ),
                    best_match=True,
                )
            result.append(Mismatch(title=title, reason=reason, diff=None))
        return result


@dataclass
class FunctionValueMatcher(Matcher):
    """Runs each of a mock's predicates against the whole request."""

    entity_name: str
    source: Callable[[RequestRequirements], Optional[list[Any]]]
    target: Callable[[HttpMockRequest], Optional[Any]]
    comparator: ValueComparator
    transformer: Optional[Transformer] = None
    weight: int = 1

    def _unmatched(self, req_value: Optional[Any], mock_values: Optional[list[Any]]) -> list[int]:
        if mock_values is None:
            return []
        if req_value is None:
            return list(range(len(mock_values)))
        return [
            idx
            for idx, value in enumerate(mock_values)
            if not self.comparator.matches(value, req_value)
        ]

    def matches(self, req: HttpMockRequest, mock: RequestRequirements) -> bool:
        return not self._unmatched(self.target(req), self.source(mock))

    def distance(self, req: HttpMockRequest, mock: RequestRequirements) -> int:
        return len(self._unmatched(self.target(req), self.source(mock))) * self.weight

    def mismatches(self, req: HttpMockRequest, mock: RequestRequirements) -> list[Mismatch]:
        return [
            Mismatch(
                title=f"The {self.entity_name} at position {idx + 1} does not match",
                reason=None,
                diff=None,
            )
            for idx in self._unmatched(self.target(req), self.source(mock))
        ]