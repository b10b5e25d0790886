"""The fixed product catalog.

Product ids are hardcoded because persisted carts and favorites refer to
them; they must never change between releases.
"""

from __future__ import annotations

from uuid import UUID

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

_PRODUCTS: tuple[Product, ...] = (
    Product(
        id=UUID("A0EEBC99-9C0B-4EF8-BB6D-6BB9BD380A11"),
        name="Evoque Atom",
        description="72V powerhouse built for raw power and smooth handling.",
        price=Money.of("1999"),
        image_ref="bicycle",
        asset_image_ref="evoque_atom",
    ),
    Product(
        id=UUID("B1FFCD99-9D1C-5EF9-CC7E-7CC0CE491B22"),
        name="Lightning Bolt",
        description="Engineered for speed and efficiency with aerodynamic design.",
        price=Money.of("1599"),
        image_ref="bolt.circle",
    ),
    Product(
        id=UUID("C2FFDE99-9E2D-6EF0-DD8F-8DD1DF502C33"),
        name="Urban Cruiser",
        description="Perfect for leisurely city rides with comfort and style.",
        price=Money.of("1299"),
        image_ref="bicycle.circle",
    ),
    Product(
        id=UUID("D3EEEF99-9F3E-7EE1-EE9F-9EE2EF613D44"),
        name="Mountain Explorer",
        description="Rugged e-bike with all-terrain capabilities and full suspension.",
        price=Money.of("2299"),
        image_ref="mountain.2",
    ),
)


class Catalog:
    """Read-only, ordered list of products."""

    def __init__(self, products: tuple[Product, ...] | list[Product] = _PRODUCTS) -> None:
        self._products = tuple(products)

    def products(self) -> tuple[Product, ...]:
        return self._products

    def get_by_id(self, product_id: UUID) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def get_by_name(self, name: str) -> Product | None:
        """Case-insensitive exact name lookup."""
        wanted = name.strip().lower()
        for product in self._products:
            if product.name.lower() == wanted:
                return product
        return None

    def __iter__(self):
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)
