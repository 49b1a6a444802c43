"""Paths of the mock server's own management API."""

from __future__ import annotations

import re

BASE_PATH = "/__httpmock__"

PING_PATH = re.compile(rf"^{BASE_PATH}/ping\Z")
MOCKS_PATH = re.compile(rf"^{BASE_PATH}/mocks\Z")
MOCK_PATH = re.compile(rf"^{BASE_PATH}/mocks/([0-9]+)\Z")
HISTORY_PATH = re.compile(rf"^{BASE_PATH}/history\Z")
VERIFY_PATH = re.compile(rf"^{BASE_PATH}/verify\Z")

_MAX_ID = 2**64 - 1


def _parse_id(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits:
        raise ValueError("cannot parse integer from empty string")
    if not all("0" <= c <= "9" for c in digits):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value > _MAX_ID:
        raise ValueError("number too large to fit in target type")
    return value


def get_path_param(regex: re.Pattern, idx: int, path: str) -> int:
    """Return capture group ``idx`` of ``regex`` in ``path`` as a non-negative id.

    Raises ValueError if the path does not match, the group is missing or it
    is not a number.
    """
    match = regex.search(path)
    if match is None:
        raise ValueError(f"Error capturing parameter from request path: {path}")

    try:
        text = match.group(idx)
    except IndexError:
        text = None
    if text is None:
        raise ValueError(f"Error capturing resource id in request path: {path}")

    try:
        return _parse_id(text)
    except ValueError as exc:
        raise ValueError(f"Error parsing id as a number: {exc}") from exc