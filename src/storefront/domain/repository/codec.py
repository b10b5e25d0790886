"""Abstract codec turning a store's collection into a text blob and back."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from storefront.domain.exceptions import ValidationError

T = TypeVar("T")

# Everything a codec may raise for a payload it cannot read.
DECODE_ERRORS = (
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
    RecursionError,
    ValidationError,
)


class Codec(ABC, Generic[T]):

    @abstractmethod
    def encode(self, value: T) -> str:
        """Serialize *value* to text."""

    @abstractmethod
    def decode(self, text: str) -> T:
        """Parse *text*; raises one of ``DECODE_ERRORS`` if it is malformed."""
