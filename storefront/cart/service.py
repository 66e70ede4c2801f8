"""Remote Cart Service contract.

Defines the interface the cart store consumes. Each backend (HTTP API,
in-memory) implements it; transport details stay behind this boundary.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .models import CartItem, ItemId


class RemoteCartService(ABC):
    """Base class for authoritative cart backends.

    Every method is a single logical round trip. Implementations raise
    ``RemoteOperationFailed`` (or any exception, which the store wraps) on
    failure; they do not retry.
    """

    @abstractmethod
    async def get_cart_items(self) -> list[CartItem]:
        """Return all cart lines, deduplicated by id."""

    @abstractmethod
    async def add_to_cart(self, product_id: ItemId, quantity: int) -> Optional[CartItem]:
        """Add units of a product.

        Returns:
            The created or merged line, or None if the backend does not
            report it (the store then refetches).
        """

    @abstractmethod
    async def update_cart_item(self, item_id: ItemId, fields: dict) -> Optional[CartItem]:
        """Update a cart line (currently only ``quantity``).

        Returns:
            The updated line, or None when the backend returns no body
        """

    @abstractmethod
    async def remove_from_cart(self, item_id: ItemId) -> None:
        """Remove a cart line."""

    @abstractmethod
    async def clear_cart(self) -> None:
        """Remove every cart line."""
