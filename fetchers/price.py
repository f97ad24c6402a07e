# fetchers/price.py
import math
from typing import Optional
from urllib.parse import urlparse

import requests

from core.errors import ParseError, TransportError
from core.logger import get_logger

logger = get_logger(__name__)

JSON_SUFFIX = ".json"


def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")


def product_name_from_url(url: str) -> str:
    """
    Last path segment without the .json suffix:
    https://host/data/cheerios.json -> "cheerios"
    """
    path = urlparse(url).path.rstrip("/")
    name = path.rsplit("/", 1)[-1]
    if name.endswith(JSON_SUFFIX):
        name = name[: -len(JSON_SUFFIX)]
    return name


class PriceFetcher:
    """
    Reads the "price" field of a JSON document served at a URL.
    The session is owned by the caller; no retries are attempted.
    """

    def __init__(self, session: requests.Session, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    def _get(self, url: str) -> requests.Response:
        logger.debug("Fetching price document: %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            raise TransportError(url, f"request to {url} failed: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.error("Request to %s returned HTTP %d.", url, r.status_code)
            raise TransportError(
                url, f"{url} returned HTTP {r.status_code}", status=r.status_code
            )
        return r

    def fetch_price(self, url: str) -> float:
        r = self._get(url)

        try:
            data = r.json(parse_constant=_reject_constant)
        except ValueError as e:
            logger.error("Response from %s is not valid JSON: %s", url, e)
            raise ParseError(url, f"response from {url} is not valid JSON") from e

        if not isinstance(data, dict) or "price" not in data:
            logger.error("Response from %s has no 'price' field: %r", url, data)
            raise ParseError(url, f"response from {url} has no 'price' field")

        price = data["price"]
        # bool is an int subclass but not a JSON number
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            logger.error("Non-numeric price from %s: %r", url, price)
            raise ParseError(url, f"price from {url} is not a number: {price!r}")

        try:
            value = float(price)
        except OverflowError as e:
            logger.error("Price from %s overflows a float: %r", url, price)
            raise ParseError(url, f"price from {url} is out of range") from e

        # 1e400 parses as inf
        if not math.isfinite(value):
            logger.error("Non-finite price from %s: %r", url, price)
            raise ParseError(url, f"price from {url} is not finite: {price!r}")

        logger.debug("Price for %s is %s", url, value)
        return value
