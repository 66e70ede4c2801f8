"""In-process cart backend.

Acts as the authoritative store for local runs and tests: sequential ids,
optional latency to make request overlap observable, and one-shot failure
injection.
"""
import asyncio
from typing import Iterable, Optional

from storefront.errors import ERROR_CART_ITEM_NOT_FOUND, RemoteOperationFailed
from storefront.logging import get_logger, sanitize_id_for_logging

from .models import CartItem, ItemId
from .service import RemoteCartService

logger = get_logger(__name__)


class InMemoryCartService(RemoteCartService):
    """
    Cart backend kept in a dict.

    Features:
    - add merges by product_id and returns the merged line
    - per-call simulated latency
    - fail_next() makes the next call raise RemoteOperationFailed
    """

    def __init__(
        self,
        items: Optional[Iterable[CartItem]] = None,
        latency: float = 0.0,
        strict_remove: bool = False,
    ):
        self._items: dict[ItemId, CartItem] = {}
        for item in items or ():
            self._items[item.id] = item
        numeric_ids = [item_id for item_id in self._items if isinstance(item_id, int)]
        self._next_id = max(numeric_ids, default=0) + 1
        self.latency = latency
        self.strict_remove = strict_remove
        self._pending_failures: list[str] = []
        self.calls: list[str] = []

    def fail_next(self, message: str) -> None:
        """Queue a failure for the next call."""
        self._pending_failures.append(message)

    async def _round_trip(self, name: str) -> None:
        self.calls.append(name)
        if self.latency:
            await asyncio.sleep(self.latency)
        if self._pending_failures:
            message = self._pending_failures.pop(0)
            logger.debug(f"Injected failure for {name}: {message}")
            raise RemoteOperationFailed(message)

    def _require(self, item_id: ItemId) -> CartItem:
        item = self._items.get(item_id)
        if item is None:
            raise RemoteOperationFailed(ERROR_CART_ITEM_NOT_FOUND, status_code=404)
        return item

    async def get_cart_items(self) -> list[CartItem]:
        await self._round_trip("get_cart_items")
        return list(self._items.values())

    async def add_to_cart(self, product_id: ItemId, quantity: int) -> Optional[CartItem]:
        await self._round_trip("add_to_cart")
        if quantity < 1:
            raise RemoteOperationFailed("Quantity must be at least 1", status_code=422)

        existing = next(
            (item for item in self._items.values() if item.product_id == product_id),
            None,
        )
        if existing:
            merged = existing.merge({"quantity": existing.quantity + quantity})
        else:
            merged = CartItem(id=self._next_id, product_id=product_id, quantity=quantity)
            self._next_id += 1
        self._items[merged.id] = merged
        return merged

    async def update_cart_item(self, item_id: ItemId, fields: dict) -> Optional[CartItem]:
        await self._round_trip("update_cart_item")
        item = self._require(item_id)
        quantity = fields.get("quantity", item.quantity)
        if quantity < 1:
            raise RemoteOperationFailed("Quantity must be at least 1", status_code=422)
        updated = item.merge({"quantity": quantity})
        self._items[item_id] = updated
        return updated

    async def remove_from_cart(self, item_id: ItemId) -> None:
        await self._round_trip("remove_from_cart")
        if self.strict_remove:
            self._require(item_id)
        if self._items.pop(item_id, None) is None:
            logger.debug(f"Remove of unknown cart item {sanitize_id_for_logging(item_id)}")

    async def clear_cart(self) -> None:
        await self._round_trip("clear_cart")
        self._items.clear()
