"""Plain request and response records exchanged with the HTTP layer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

HeaderValue = Union[str, bytes]


@dataclass
class ServerRequestHeader:
    """Method, path, raw query string and headers of an incoming request."""

    method: str = ""
    path: str = ""
    query: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ServerResponse:
    """Status, headers and body of a response to send back."""

    status: int = 0
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


def _is_visible(char: str) -> bool:
    return char == "\t" or " " <= char <= "~"


def _header_text(value: HeaderValue) -> str:
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError as exc:
            raise ValueError("failed to parse header value") from exc
    if not all(_is_visible(c) for c in value):
        raise ValueError("failed to parse header value")
    return value


def extract_headers(
    header_items: Iterable[tuple[HeaderValue, HeaderValue]],
) -> list[tuple[str, str]]:
    """Turn raw header pairs into text pairs with lower-case names.

    Raises ValueError if a value holds characters that are not visible ASCII.
    """
    headers = []
    for name, value in header_items:
        if isinstance(name, bytes):
            name = name.decode("ascii", "replace")
        try:
            text = _header_text(value)
        except ValueError as exc:
            raise ValueError(f"error parsing headers: {exc}") from exc
        headers.append((name.lower(), text))
    return headers