"""Cart models and the derived item count."""
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional, Tuple, Union

ItemId = Union[int, str]


def compute_total(items: Iterable["CartItem"]) -> int:
    """Total number of units in the cart (sum of quantities)."""
    return sum(item.quantity for item in items)


@dataclass(frozen=True)
class CartItem:
    """Single line in the cart: a product reference plus a quantity."""
    id: ItemId
    product_id: ItemId
    quantity: int

    def merge(self, fields: dict) -> "CartItem":
        """Return a copy with known fields taken from ``fields``.

        Accepts both attribute names and wire names (``productId``).
        Unknown keys and the ``id`` are ignored.
        """
        changes: dict[str, Any] = {}
        if "quantity" in fields and fields["quantity"] is not None:
            changes["quantity"] = int(fields["quantity"])
        product_id = fields.get("productId", fields.get("product_id"))
        if product_id is not None:
            changes["product_id"] = product_id
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict:
        """Convert to wire dictionary."""
        return {
            "id": self.id,
            "productId": self.product_id,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class CartState:
    """Read-only snapshot of the cart handed to observers."""
    items: Tuple[CartItem, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    total_count: int = field(init=False)

    def __post_init__(self):
        # Derived from items; never passed in
        object.__setattr__(self, "total_count", compute_total(self.items))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, item_id: ItemId) -> Optional[CartItem]:
        """Find cart line by id."""
        return next((item for item in self.items if item.id == item_id), None)

    def quantity_for_product(self, product_id: ItemId) -> int:
        """Units of a product across all lines."""
        return compute_total(item for item in self.items if item.product_id == product_id)
