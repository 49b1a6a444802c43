"""Functions that pull the actual values out of an incoming request.

Multi-value targets return a list of ``(key, value)`` pairs. A target returns
None when the request has nothing to offer for it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import parse_qsl

from mockserve.model import HttpMockRequest, parse_cookies

_log = logging.getLogger(__name__)

KeyValue = tuple[str, Optional[str]]


def string_body_target(req: HttpMockRequest) -> Optional[str]:
    """The body as text; invalid UTF-8 is replaced."""
    if req.body is None:
        return None
    return req.body.decode("utf-8", "replace")


def json_body_target(req: HttpMockRequest) -> Optional[Any]:
    """The body parsed as JSON, or None if absent or not valid JSON."""
    if req.body is None:
        return None
    try:
        return json.loads(req.body)
    except (ValueError, UnicodeDecodeError) as exc:
        _log.debug("Cannot parse json value: %s", exc)
        return None


def cookie_target(req: HttpMockRequest) -> Optional[list[KeyValue]]:
    """Cookies of the request, or None if the Cookie header cannot be parsed."""
    try:
        cookies = parse_cookies(req)
    except ValueError as exc:
        _log.info(
            "Cannot parse cookies. Cookie matching will not work for this request. Error: %s",
            exc,
        )
        return None
    return [(k, v) for k, v in cookies]


def header_target(req: HttpMockRequest) -> Optional[list[KeyValue]]:
    if req.headers is None:
        return None
    return [(k, v) for k, v in req.headers]


def query_parameter_target(req: HttpMockRequest) -> Optional[list[KeyValue]]:
    if req.query_params is None:
        return None
    return [(k, v) for k, v in req.query_params]


def path_target(req: HttpMockRequest) -> Optional[str]:
    return req.path


def method_target(req: HttpMockRequest) -> Optional[str]:
    return req.method


def full_request_target(req: HttpMockRequest) -> Optional[HttpMockRequest]:
    return req


def form_urlencoded_body_target(req: HttpMockRequest) -> Optional[list[KeyValue]]:
    """The body decoded as application/x-www-form-urlencoded pairs."""
    if req.body is None:
        return None
    text = req.body.decode("utf-8", "replace")
    return [
        (k, v)
        for k, v in parse_qsl(text, keep_blank_values=True, errors="replace")
    ]