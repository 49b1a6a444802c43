"""Transformers that turn one value into another before comparison."""

from __future__ import annotations

import base64
import binascii
from abc import ABC, abstractmethod
from typing import Any


class Transformer(ABC):
    """Turns a value into another value; raises ValueError if it cannot."""

    @abstractmethod
    def transform(self, value: Any) -> Any:
        """Return the transformed value."""


class DecodeBase64ValueTransformer(Transformer):
    """Decodes a base64 string; invalid UTF-8 in the result is replaced."""

    def transform(self, value: str) -> str:
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid base64 value: {exc}") from exc
        return decoded.decode("utf-8", "replace")


class ToLowercaseTransformer(Transformer):
    """Lower-cases a string."""

    def transform(self, value: str) -> str:
        return value.lower()