# core/errors.py
"""
Errors raised while building a cart.

    ShopError
    ├── TransportError  network failure or non-2xx response
    └── ParseError      body is not JSON or has no numeric "price"

FetchError is kept as another name for TransportError.
"""
from typing import Optional


class ShopError(Exception):
    """Base class for every failure that aborts a run."""


class TransportError(ShopError):
    def __init__(self, url: str, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(ShopError):
    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


FetchError = TransportError
