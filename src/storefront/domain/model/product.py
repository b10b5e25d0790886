"""Product value.

Products are copied by value into cart and order lines, so a line always
carries the name and price the customer saw when the line was created.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A purchasable item from the catalog."""

    id: UUID
    name: str
    description: str
    price: Money
    image_ref: str
    asset_image_ref: str | None = None
