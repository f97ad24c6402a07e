# fetchers/__init__.py
from .price import PriceFetcher, product_name_from_url

__all__ = ["PriceFetcher", "product_name_from_url"]
