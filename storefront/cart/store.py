"""Cart store: in-memory mirror of the remote cart."""
import asyncio
from typing import Any, Awaitable, Callable, Optional

from storefront.errors import ERROR_INVALID_RESPONSE, RemoteOperationFailed
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging

from . import reducers
from .models import CartItem, CartState, ItemId
from .result import Err, Ok, OperationResult
from .service import RemoteCartService

logger = get_logger(__name__)

Listener = Callable[[CartState], None]
Reducer = Callable[[reducers.Items, Any], reducers.Items]

_UNCHANGED = object()


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError("quantity must be a positive integer")


class CartStore:
    """
    Observable mirror of the remote cart.

    Every remote operation runs pending -> remote call -> settled:
    - pending: loading on, error cleared, observers notified
    - settled ok: the operation's reducer is applied to items
    - settled err: error recorded, items untouched

    Nothing is applied before the remote call succeeds. Overlapping
    operations are not queued; each applies its own result when it settles
    and ``error`` reflects whichever settled last. ``loading`` stays on until
    the last in-flight operation settles.
    """

    def __init__(self, service: RemoteCartService):
        self._service = service
        self._items: reducers.Items = ()
        self._error: Optional[str] = None
        self._in_flight = 0
        self._state = CartState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CartState:
        """Current read-only snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        """Forget the last failure. No remote call."""
        if self._error is not None:
            self._commit(error=None)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _commit(self, items: Any = _UNCHANGED, error: Any = _UNCHANGED) -> None:
        if items is not _UNCHANGED:
            self._items = items
        if error is not _UNCHANGED:
            self._error = error
        # CartState derives total_count from items
        self._state = CartState(
            items=self._items,
            loading=self._in_flight > 0,
            error=self._error,
        )
        self._notify()

    def _notify(self) -> None:
        state = self._state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Cart listener failed")

    def _begin(self, operation: str) -> None:
        self._in_flight += 1
        logger.debug(f"cart.{operation} pending")
        self._commit(error=None)

    def _settle(self, items: Any = _UNCHANGED, error: Any = _UNCHANGED) -> None:
        self._in_flight -= 1
        self._commit(items=items, error=error)

    async def _run(
        self,
        operation: str,
        call: Callable[[], Awaitable[Any]],
        reduce: Reducer,
    ) -> OperationResult:
        self._begin(operation)
        try:
            payload = await call()
        except asyncio.CancelledError:
            self._settle()
            raise
        except Exception as e:
            failure = RemoteOperationFailed.from_exception(e)
            logger.warning(f"cart.{operation} failed: {sanitize_string_for_logging(failure.message, 200)}")
            self._settle(error=failure.message)
            return Err(operation, failure)

        # Read and write of items happen here with no await in between
        try:
            new_items = reduce(self._items, payload)
        except Exception:
            logger.exception(f"cart.{operation} returned an unusable payload")
            failure = RemoteOperationFailed(ERROR_INVALID_RESPONSE)
            self._settle(error=failure.message)
            return Err(operation, failure)

        self._settle(items=new_items)
        return Ok(operation, payload)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def fetch_cart_items(self) -> OperationResult:
        """Replace local items with the remote cart."""
        return await self._run(
            "fetch_cart_items",
            self._service.get_cart_items,
            lambda items, fetched: reducers.replace_items(fetched),
        )

    async def add_item_to_cart(self, product_id: ItemId, quantity: int = 1) -> OperationResult:
        """Add units of a product.

        The returned line is merged by id. If the backend does not return
        the line, the cart is refetched before the operation settles, so
        ``total_count`` includes the add either way.
        """
        _validate_quantity(quantity)

        async def call():
            added = await self._service.add_to_cart(product_id, quantity)
            if added is not None:
                return added
            logger.info(
                f"Add of product {sanitize_id_for_logging(product_id)} returned no item, refetching cart"
            )
            return await self._service.get_cart_items()

        def reduce(items, payload):
            if isinstance(payload, CartItem):
                return reducers.merge_added_item(items, payload)
            return reducers.replace_items(payload)

        return await self._run("add_item_to_cart", call, reduce)

    async def update_cart_item_quantity(self, item_id: ItemId, quantity: int) -> OperationResult:
        """Set the quantity of a cart line.

        Unknown ids locally are a no-op on items; a later fetch resolves drift.
        """
        _validate_quantity(quantity)

        def reduce(items, updated):
            fields = updated.to_dict() if updated is not None else None
            return reducers.merge_updated_item(items, item_id, fields)

        return await self._run(
            "update_cart_item_quantity",
            lambda: self._service.update_cart_item(item_id, {"quantity": quantity}),
            reduce,
        )

    async def remove_item_from_cart(self, item_id: ItemId) -> OperationResult:
        """Remove a cart line (no-op locally if absent)."""
        return await self._run(
            "remove_item_from_cart",
            lambda: self._service.remove_from_cart(item_id),
            lambda items, _: reducers.remove_item(items, item_id),
        )

    async def clear_all_cart(self) -> OperationResult:
        """Empty the cart regardless of response body."""
        return await self._run(
            "clear_all_cart",
            self._service.clear_cart,
            lambda items, _: reducers.clear_items(items),
        )
