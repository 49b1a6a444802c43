"""Data types shared by the mock server and the matching helpers."""

from __future__ import annotations

import difflib
import json
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

Pair = tuple[str, str]
MatcherFunction = Callable[["HttpMockRequest"], bool]


class Tokenizer(Enum):
    """How text is split into tokens before it is diffed."""

    LINE = "Line"
    WORD = "Word"
    CHARACTER = "Character"


_DIFF_KINDS = ("same", "add", "rem")


@dataclass(frozen=True)
class Diff:
    """One token of a diff: unchanged (``same``), added or removed."""

    kind: str
    text: str

    def __post_init__(self) -> None:
        if self.kind not in _DIFF_KINDS:
            raise ValueError(f"unknown diff kind: {self.kind!r}")

    def to_dict(self) -> dict[str, str]:
        return {self.kind.capitalize(): self.text}


@dataclass
class DiffResult:
    tokenizer: Tokenizer
    distance: float
    differences: list[Diff]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tokenizer": self.tokenizer.value,
            "distance": self.distance,
            "differences": [d.to_dict() for d in self.differences],
        }


@dataclass
class Reason:
    expected: str
    actual: str
    comparison: str
    best_match: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected": self.expected,
            "actual": self.actual,
            "comparison": self.comparison,
            "best_match": self.best_match,
        }


@dataclass
class Mismatch:
    title: str
    reason: Optional[Reason] = None
    diff: Optional[DiffResult] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "reason": self.reason.to_dict() if self.reason else None,
            "diff": self.diff.to_dict() if self.diff else None,
        }


def _pairs_to_list(pairs: Optional[Iterable[Pair]]) -> Optional[list[list[str]]]:
    return None if pairs is None else [[k, v] for k, v in pairs]


def _pairs_from(data: Any) -> Optional[list[Pair]]:
    if data is None:
        return None
    if isinstance(data, Mapping):
        return [(str(k), str(v)) for k, v in data.items()]
    result = []
    for item in data:
        key, value = item
        result.append((str(key), str(value)))
    return result


def _body_to_text(body: Optional[bytes]) -> Optional[str]:
    return None if body is None else body.decode("utf-8", "replace")


def _body_from(data: Any) -> Optional[bytes]:
    if data is None:
        return None
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@dataclass
class HttpMockRequest:
    """A request as received by the mock server."""

    method: str
    path: str
    headers: Optional[list[Pair]] = None
    query_params: Optional[list[Pair]] = None
    body: Optional[bytes] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "headers": _pairs_to_list(self.headers),
            "query_params": _pairs_to_list(self.query_params),
            "body": _body_to_text(self.body),
        }


_PAIR_FIELDS = frozenset({"headers", "cookies", "query_param", "x_www_form_urlencoded"})
_PATTERN_FIELDS = frozenset({"path_matches", "body_matches"})


@dataclass
class RequestRequirements:
    """Everything a mock expects of a request; unset fields are not checked."""

    path: Optional[str] = None
    path_contains: Optional[list[str]] = None
    path_matches: Optional[list[re.Pattern]] = None
    method: Optional[str] = None
    headers: Optional[list[Pair]] = None
    header_exists: Optional[list[str]] = None
    cookies: Optional[list[Pair]] = None
    cookie_exists: Optional[list[str]] = None
    body: Optional[str] = None
    json_body: Any = None
    json_body_includes: Optional[list[Any]] = None
    body_contains: Optional[list[str]] = None
    body_matches: Optional[list[re.Pattern]] = None
    query_param_exists: Optional[list[str]] = None
    query_param: Optional[list[Pair]] = None
    x_www_form_urlencoded: Optional[list[Pair]] = None
    x_www_form_urlencoded_key_exists: Optional[list[str]] = None
    matchers: Optional[list[MatcherFunction]] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; user matcher functions are left out."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "matchers" or value is None:
                continue
            if f.name in _PAIR_FIELDS:
                value = _pairs_to_list(value)
            elif f.name in _PATTERN_FIELDS:
                value = [p.pattern for p in value]
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RequestRequirements":
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "matchers":
                continue
            value = data.get(f.name)
            if value is None:
                continue
            if f.name in _PAIR_FIELDS:
                value = _pairs_from(value)
            elif f.name in _PATTERN_FIELDS:
                value = [re.compile(p) for p in value]
            elif isinstance(value, list):
                value = list(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass
class MockServerHttpResponse:
    status: Optional[int] = None
    headers: Optional[list[Pair]] = None
    body: Optional[bytes] = None
    delay: Optional[timedelta] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "headers": _pairs_to_list(self.headers),
            "body": _body_to_text(self.body),
            "delay": None if self.delay is None else round(self.delay.total_seconds() * 1000),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MockServerHttpResponse":
        delay = data.get("delay")
        status = data.get("status")
        return cls(
            status=None if status is None else int(status),
            headers=_pairs_from(data.get("headers")),
            body=_body_from(data.get("body")),
            delay=None if delay is None else timedelta(milliseconds=delay),
        )


@dataclass
class MockDefinition:
    request: RequestRequirements
    response: MockServerHttpResponse

    def to_dict(self) -> dict[str, Any]:
        return {"request": self.request.to_dict(), "response": self.response.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MockDefinition":
        return cls(
            request=RequestRequirements.from_dict(data.get("request") or {}),
            response=MockServerHttpResponse.from_dict(data.get("response") or {}),
        )


@dataclass
class ActiveMock:
    id: int
    definition: MockDefinition
    call_counter: int = 0
    is_static: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "call_counter": self.call_counter,
            "definition": self.definition.to_dict(),
            "is_static": self.is_static,
        }


@dataclass
class ClosestMatch:
    request: HttpMockRequest
    request_index: int
    mismatches: list[Mismatch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "request": self.request.to_dict(),
            "request_index": self.request_index,
            "mismatches": [m.to_dict() for m in self.mismatches],
        }


def _tokenize(text: str, tokenizer: Tokenizer) -> list[str]:
    if tokenizer is Tokenizer.LINE:
        return text.splitlines(keepends=True)
    if tokenizer is Tokenizer.WORD:
        return re.findall(r"\s+|\S+", text)
    return list(text)


def diff_str(base: str, edit: str, tokenizer: Tokenizer) -> DiffResult:
    """Diff ``edit`` against ``base`` token by token."""
    old = _tokenize(base, tokenizer)
    new = _tokenize(edit, tokenizer)
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    differences: list[Diff] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            differences.extend(Diff("same", t) for t in old[i1:i2])
            continue
        differences.extend(Diff("rem", t) for t in old[i1:i2])
        differences.extend(Diff("add", t) for t in new[j1:j2])
    return DiffResult(tokenizer=tokenizer, distance=matcher.ratio(), differences=differences)


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings, counted in characters."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + (ca != cb))
            )
        previous = current
    return previous[-1]


def _display(value: Any) -> str:
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


def distance_for(expected: Any, actual: Any) -> int:
    """Edit distance between the textual forms of two values; None counts as empty."""
    return levenshtein(_display(expected), _display(actual))


def parse_cookies(req: HttpMockRequest) -> list[Pair]:
    """Return the cookies of the request's Cookie header as name/value pairs.

    Raises ValueError if the header is malformed.
    """
    header = next((v for k, v in req.headers or () if k.lower() == "cookie"), None)
    if header is None:
        return []
    cookies: list[Pair] = []
    for part in header.split(";"):
        part = part.strip()
        if not part:
            continue
        name, sep, value = part.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"invalid cookie pair: {part!r}")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies.append((name, value))
    return cookies