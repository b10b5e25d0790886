"""Favorites store: the set of product ids the customer has hearted."""

from __future__ import annotations

import logging
from uuid import UUID

from storefront.application.persistent_store import PersistentStore
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.product import Product
from storefront.domain.repository.codec import Codec
from storefront.domain.repository.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)


def _product_id(target: UUID | Product) -> UUID:
    return target.id if isinstance(target, Product) else target


class FavoritesStore(PersistentStore[frozenset[UUID]]):

    storage_key = "favorites.store.bikeIds"
    event_name = "favorites.store.changed"

    def __init__(
        self,
        storage: KeyValueStorage,
        codec: Codec[frozenset[UUID]],
        catalog: Catalog,
    ) -> None:
        super().__init__(storage, codec)
        self._catalog = catalog
        self._ids: set[UUID] = set()

    # --- Queries --------------------------------------------------------------

    @property
    def favorite_ids(self) -> frozenset[UUID]:
        return frozenset(self._ids)

    @property
    def count(self) -> int:
        return len(self._ids)

    @property
    def is_empty(self) -> bool:
        return not self._ids

    @property
    def favorite_products(self) -> list[Product]:
        """Favorited products in catalog order.

        Ids no longer in the catalog are skipped.
        """
        return [p for p in self._catalog.products() if p.id in self._ids]

    def is_favorite(self, target: UUID | Product) -> bool:
        return _product_id(target) in self._ids

    # --- Mutations ------------------------------------------------------------

    def add(self, target: UUID | Product) -> None:
        product_id = _product_id(target)
        if product_id in self._ids:
            return
        self._require_owner_loop()
        self._ids.add(product_id)
        logger.debug("Favorites: added %s", product_id)
        self._schedule_save()

    def remove(self, target: UUID | Product) -> None:
        product_id = _product_id(target)
        if product_id not in self._ids:
            return
        self._require_owner_loop()
        self._ids.discard(product_id)
        logger.debug("Favorites: removed %s", product_id)
        self._schedule_save()

    def toggle(self, target: UUID | Product) -> bool:
        """Flip membership; returns whether the product is now a favorite."""
        if self.is_favorite(target):
            self.remove(target)
            return False
        self.add(target)
        return True

    def clear(self) -> None:
        self._require_owner_loop()
        self._ids.clear()
        self._schedule_save()

    # --- PersistentStore hooks ------------------------------------------------

    def _empty(self) -> frozenset[UUID]:
        return frozenset()

    def _snapshot(self) -> frozenset[UUID]:
        return frozenset(self._ids)

    def _restore(self, value: frozenset[UUID]) -> None:
        self._ids = set(value)
