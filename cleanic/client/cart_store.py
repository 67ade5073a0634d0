"""
Cart store - the ordered list of service lines the customer is about to book.

The store is the only writer of its storage key. Every mutation updates the
in-memory list first and then writes the whole cart through to storage; a
failed write is logged and the in-memory cart stays authoritative.
"""

import json
import logging
import threading
import time
from typing import Callable, Optional

from pydantic import BaseModel, Field, ValidationError

from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart-storage"
CART_STORAGE_VERSION = 0


class CartItem(BaseModel):
    """One package + vehicle selection; identical selections stay separate lines"""

    id: str
    packageId: str
    packageName: str
    basePrice: int
    vehicleType: str
    finalPrice: int  # basePrice + vehicle surcharge, captured when the line was added
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> int:
        return self.finalPrice * self.quantity


def _now_ms() -> int:
    return int(time.time() * 1000)


def serialize_cart(items) -> str:
    """Persisted document for a sequence of CartItem"""
    return json.dumps(
        {
            "state": {"items": [item.model_dump() for item in items]},
            "version": CART_STORAGE_VERSION,
        }
    )


def deserialize_cart(raw: str) -> list[CartItem]:
    """
    Parse a persisted cart document.

    Raises:
        ValueError: If the document is not a valid cart
    """
    try:
        document = json.loads(raw)
        items = document["state"]["items"]
        return [CartItem.model_validate(item) for item in items]
    except (json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
        raise ValueError(f"Invalid cart document: {e}") from e


class CartStore:
    """Cart operations backed by a key/value storage"""

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = CART_STORAGE_KEY,
        clock: Callable[[], int] = _now_ms,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self._clock = clock
        self._items: list[CartItem] = []
        self._lock = threading.RLock()

    @classmethod
    def load(cls, storage: KeyValueStorage, storage_key: str = CART_STORAGE_KEY, **kwargs) -> "CartStore":
        """Create a store rehydrated from storage; unreadable data starts an empty cart"""
        store = cls(storage, storage_key=storage_key, **kwargs)
        try:
            raw = storage.get_item(storage_key)
        except Exception as e:
            logger.error(f"❌ Failed to read cart from storage: {e}")
            return store

        if raw is None:
            return store

        try:
            store._items = deserialize_cart(raw)
        except ValueError as e:
            logger.warning(f"⚠️ Discarding unreadable persisted cart: {e}")
            return store

        logger.info(f"🛒 Restored cart with {len(store._items)} line(s)")
        return store

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _generate_id(self, package_id: str, vehicle_type: str) -> str:
        base_id = f"{package_id}-{vehicle_type}-{self._clock()}"
        existing = {item.id for item in self._items}
        candidate = base_id
        suffix = 1
        while candidate in existing:
            candidate = f"{base_id}-{suffix}"
            suffix += 1
        return candidate

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.storage_key, serialize_cart(self._items))
        except Exception as e:
            logger.error(f"❌ Failed to persist cart: {e}")

    def add_item(self, item: dict) -> CartItem:
        """Append a new line; never merges with an existing identical selection"""
        with self._lock:
            fields = {key: value for key, value in item.items() if key != "id"}
            fields["packageId"] = str(fields["packageId"])
            cart_item = CartItem(
                id=self._generate_id(fields["packageId"], fields["vehicleType"]),
                **fields,
            )
            self._items.append(cart_item)
            self._persist()
            return cart_item

    def remove_item(self, item_id: str) -> None:
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            if len(remaining) == len(self._items):
                return
            self._items = remaining
            self._persist()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """
        Set a line's quantity in place; zero or less removes the line.

        Raises:
            ValidationError: If the quantity is not a whole number. The cart is left unchanged.
        """
        with self._lock:
            if quantity <= 0:
                self.remove_item(item_id)
                return

            updated = list(self._items)
            changed = False
            for index, item in enumerate(updated):
                if item.id == item_id:
                    updated[index] = CartItem.model_validate({**item.model_dump(), "quantity": quantity})
                    changed = True
            if changed:
                self._items = updated
                self._persist()

    def clear_cart(self) -> None:
        with self._lock:
            self._items = []
            self._persist()

    def get_item(self, item_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def get_total_items(self) -> int:
        """Sum of quantities, not the number of lines"""
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> int:
        return sum(item.line_total for item in self._items)
