"""Functions that pull the expected values out of a mock's request requirements.

Single-value sources return a list of expected values, multi-value sources a
list of ``(key, value)`` pairs where ``value`` is None when only the presence
of the key is required. Every source returns None if the mock sets nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Optional

from mockserve.model import MatcherFunction, RequestRequirements

KeyValue = tuple[str, Optional[str]]


def _single(value: Any) -> Optional[list[Any]]:
    return None if value is None else [value]


def _many(values: Optional[Iterable[Any]]) -> Optional[list[Any]]:
    return None if values is None else list(values)


def _pairs(pairs: Optional[Iterable[tuple[str, str]]]) -> Optional[list[KeyValue]]:
    return None if pairs is None else [(k, v) for k, v in pairs]


def _keys(keys: Optional[Iterable[str]]) -> Optional[list[KeyValue]]:
    return None if keys is None else [(k, None) for k in keys]


def string_body_source(mock: RequestRequirements) -> Optional[list[str]]:
    return _single(mock.body)


def string_body_contains_source(mock: RequestRequirements) -> Optional[list[str]]:
    return _many(mock.body_contains)


def json_body_source(mock: RequestRequirements) -> Optional[list[Any]]:
    return _single(mock.json_body)


def partial_json_body_source(mock: RequestRequirements) -> Optional[list[Any]]:
    return _many(mock.json_body_includes)


def body_regex_source(mock: RequestRequirements) -> Optional[list[re.Pattern]]:
    return _many(mock.body_matches)


def method_source(mock: RequestRequirements) -> Optional[list[str]]:
    return _single(mock.method)


def string_path_source(mock: RequestRequirements) -> Optional[list[str]]:
    return _single(mock.path)


def path_contains_source(mock: RequestRequirements) -> Optional[list[str]]:
    return _many(mock.path_contains)


def path_regex_source(mock: RequestRequirements) -> Optional[list[re.Pattern]]:
    return _many(mock.path_matches)


def cookie_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _pairs(mock.cookies)


def cookie_exists_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _keys(mock.cookie_exists)


def header_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _pairs(mock.headers)


def header_exists_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _keys(mock.header_exists)


def query_parameter_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _pairs(mock.query_param)


def query_parameter_exists_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _keys(mock.query_param_exists)


def form_urlencoded_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _pairs(mock.x_www_form_urlencoded)


def form_urlencoded_key_exists_source(mock: RequestRequirements) -> Optional[list[KeyValue]]:
    return _keys(mock.x_www_form_urlencoded_key_exists)


def function_source(mock: RequestRequirements) -> Optional[list[MatcherFunction]]:
    return _many(mock.matchers)