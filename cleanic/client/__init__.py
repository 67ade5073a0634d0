"""
Mobile client core: persisted cart, checkout and the booking API client.
"""

from .api import BackendConnectionError, BookingApiClient
from .cart_store import CART_STORAGE_KEY, CartItem, CartStore
from .checkout import CheckoutAggregator, CheckoutForm, CheckoutResult, CheckoutValidationError
from .storage import FileStorage, MemoryStorage, RedisStorage, get_default_storage

__all__ = [
    "BackendConnectionError",
    "BookingApiClient",
    "CART_STORAGE_KEY",
    "CartItem",
    "CartStore",
    "CheckoutAggregator",
    "CheckoutForm",
    "CheckoutResult",
    "CheckoutValidationError",
    "FileStorage",
    "MemoryStorage",
    "RedisStorage",
    "get_default_storage",
]
