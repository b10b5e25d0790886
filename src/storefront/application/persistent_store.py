"""Base class for the persisted, observable entity stores.

A store owns one collection.  Mutations change the in-memory collection
synchronously and then hand a snapshot to a single background writer,
so callers never wait on disk and writes land in call order.  Once a
write succeeds the store's change event is emitted back on the event
loop that owns the store.

All store methods must be called from that one event loop; a mutation
made with no running loop raises RuntimeError before anything changes.
Persistence failures are logged and never raised to callers.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, TypeVar

from storefront.application.change_notifier import ChangeNotifier
from storefront.domain.repository.codec import DECODE_ERRORS, Codec
from storefront.domain.repository.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistentStore(ABC, Generic[T]):

    storage_key: str
    event_name: str

    def __init__(self, storage: KeyValueStorage, codec: Codec[T]) -> None:
        self._storage = storage
        self._codec = codec
        self.changes = ChangeNotifier(self.event_name)
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"{self.storage_key}.writer"
        )
        self._pending: set[asyncio.Task] = set()

    # --- Collection hooks -----------------------------------------------------

    @abstractmethod
    def _empty(self) -> T:
        """A fresh, empty collection."""

    @abstractmethod
    def _snapshot(self) -> T:
        """An immutable copy of the current collection, safe to encode off-loop."""

    @abstractmethod
    def _restore(self, value: T) -> None:
        """Replace the in-memory collection with *value*."""

    # --- Persistence ----------------------------------------------------------

    async def load(self) -> None:
        """Replace the collection with the persisted one.

        Absent, unreadable or malformed data all leave the store empty.
        """
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(
                self._executor, self._storage.get, self.storage_key
            )
        except UnicodeDecodeError as exc:
            logger.warning("Discarding malformed %s data: %s", self.storage_key, exc)
            text = None
        except OSError:
            logger.exception("Could not read %s", self.storage_key)
            text = None

        if text is None:
            self._restore(self._empty())
            return

        try:
            value = self._codec.decode(text)
        except DECODE_ERRORS as exc:
            logger.warning("Discarding malformed %s data: %s", self.storage_key, exc)
            value = self._empty()
        self._restore(value)
        logger.debug("Loaded %s", self.storage_key)

    async def save(self) -> bool:
        """Persist the current collection; True if the write succeeded."""
        return await self._schedule_save()

    async def flush(self) -> None:
        """Wait until every write scheduled so far has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    @property
    def has_pending_writes(self) -> bool:
        return bool(self._pending)

    def _require_owner_loop(self) -> None:
        """Raise before any change is made if no event loop is running."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError(
                f"{type(self).__name__} can only be changed from a running event loop"
            ) from None

    def _schedule_save(self) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        # Submitted immediately so the single writer sees writes in call order.
        write = asyncio.wrap_future(
            self._executor.submit(self._write, self._snapshot()), loop=loop
        )
        task = loop.create_task(self._complete_save(write))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _complete_save(self, write: asyncio.Future) -> bool:
        try:
            await write
        except Exception:
            logger.exception("Failed to persist %s; keeping in-memory state", self.storage_key)
            return False
        self.changes.emit()
        return True

    def _write(self, snapshot: T) -> None:
        self._storage.set(self.storage_key, self._codec.encode(snapshot))
