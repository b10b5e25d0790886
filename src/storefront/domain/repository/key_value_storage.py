"""Abstract durable key-value storage.

Defined in the domain layer so the stores never depend on
infrastructure. Each store owns exactly one key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the blob stored under *key*, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Durably store *value* under *key*, replacing any previous blob."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*; a missing key is not an error."""
