# core/cart_store.py
import threading
from typing import Callable, Optional

from .logger import get_logger
from .models import Cart, Product

logger = get_logger(__name__)


class CartStore:
    """
    Holds the current Cart. Every change is a read-modify-write done under
    one lock, so concurrent callers never lose an increment.
    """

    def __init__(self, initial: Optional[Cart] = None):
        self._cart = initial if initial is not None else Cart()
        self._lock = threading.Lock()

    def modify(self, fn: Callable[[Cart], Cart]) -> Cart:
        with self._lock:
            self._cart = fn(self._cart)
            return self._cart

    def update(self, product: Product, quantity: int) -> None:
        cart = self.modify(lambda c: c.add(product, quantity))
        logger.debug(
            "Cart now holds %d of %s @ %s.",
            cart.quantity_of(product), product.name, product.price,
        )

    def snapshot(self) -> Cart:
        with self._lock:
            return self._cart
