import random
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import requests

from core.cart_store import CartStore
from core.errors import ShopError
from core.logger import get_logger
from core.models import Product
from core.totals import Totals, calculate_totals
from fetchers import PriceFetcher, product_name_from_url

logger = get_logger(__name__)

_DATA_BASE = "https://raw.githubusercontent.com/mattjanks16/shopping-cart-test-data/main"

PRICE_URLS = [
    f"{_DATA_BASE}/cheerios.json",
    f"{_DATA_BASE}/cornflakes.json",
    f"{_DATA_BASE}/frosties.json",
    f"{_DATA_BASE}/shreddies.json",
    f"{_DATA_BASE}/weetabix.json",
]

MIN_QUANTITY = 1
MAX_QUANTITY = 10

Pick = Tuple[str, int]


def pick_order(urls: Sequence[str], rng: random.Random) -> List[Pick]:
    """
    One (url, quantity) pick per URL; URLs are drawn with replacement.
    No URLs means no picks.
    """
    return [
        (rng.choice(urls), rng.randint(MIN_QUANTITY, MAX_QUANTITY))
        for _ in range(len(urls))
    ]


def _add_pick(pick: Pick, fetcher: PriceFetcher, store: CartStore) -> None:
    url, quantity = pick
    name = product_name_from_url(url)
    price = fetcher.fetch_price(url)
    store.update(Product(name, price), quantity)
    logger.info("Added %d x %s @ %s.", quantity, name, price)


def fill_cart(
    picks: Sequence[Pick],
    fetcher: PriceFetcher,
    store: CartStore,
    max_workers: int = 1,
) -> None:
    """
    Fetch a price for every pick and add it to the store.
    The first failure propagates; with max_workers > 1 the remaining
    queued fetches are cancelled.
    """
    if max_workers <= 1:
        for pick in picks:
            _add_pick(pick, fetcher, store)
        return

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_add_pick, pick, fetcher, store) for pick in picks]
        try:
            for fut in futures:
                fut.result()
        except Exception:
            for fut in futures:
                fut.cancel()
            raise


def format_totals(totals: Totals) -> str:
    return (
        f"Subtotal = ${totals.subtotal:.2f}\n"
        f"Tax = ${totals.tax:.2f}\n"
        f"Total = ${totals.total:.2f}"
    )


def _run_with_session(
    session: requests.Session, urls: Sequence[str], rng: random.Random
) -> Totals:
    fetcher = PriceFetcher(session)
    store = CartStore()

    picks = pick_order(urls, rng)
    logger.debug("Picks: %s", picks)
    fill_cart(picks, fetcher, store)

    cart = store.snapshot()
    totals = calculate_totals(cart)
    logger.info("Cart has %d distinct products.", len(cart))
    print(format_totals(totals))
    return totals


def run(
    urls: Sequence[str] = PRICE_URLS,
    rng: Optional[random.Random] = None,
    session: Optional[requests.Session] = None,
) -> Totals:
    rng = rng or random.Random()
    if session is not None:
        return _run_with_session(session, urls, rng)
    with requests.Session() as own_session:
        return _run_with_session(own_session, urls, rng)


def main() -> int:
    try:
        run()
    except ShopError as e:
        logger.error("Run aborted: %s", e)
        raise SystemExit(2)
    except Exception as e:
        logger.exception("Fatal shopping cart error: %s", e)
        raise SystemExit(2)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
