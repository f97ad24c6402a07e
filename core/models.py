# core/models.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple


@dataclass(frozen=True)
class Product:
    """
    A priced product. Two products are the same cart entry only when both
    name and price match.
    """
    name: str
    price: float


@dataclass(frozen=True)
class Cart:
    """
    Immutable mapping of Product -> purchased quantity.
    add() returns a new Cart and leaves the receiver untouched.
    """
    items: Mapping[Product, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dict can't leak in.
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def add(self, product: Product, quantity: int) -> "Cart":
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")
        updated = dict(self.items)
        updated[product] = updated.get(product, 0) + quantity
        return Cart(updated)

    def quantity_of(self, product: Product) -> int:
        return self.items.get(product, 0)

    def entries(self) -> Iterator[Tuple[Product, int]]:
        return iter(self.items.items())

    def __len__(self) -> int:
        return len(self.items)
