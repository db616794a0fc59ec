"""Random demo sales so a fresh install has something to chart.

Each of the last ``days`` days gets 0-5 sales. A sale picks a product and a
quantity of 1-3, and lands at a random time in the 24 hours after that day's
anchor (``now`` minus the day offset), capped at ``now``. The RNG is injected.
"""

import random
from collections.abc import Sequence
from datetime import datetime, timedelta

from src.rc_metrics.domain.models import NewSale
from src.rc_product.domain.models import Product

SAMPLE_DAYS = 30
MAX_SALES_PER_DAY = 5
MAX_QUANTITY = 3


def generate_sample_sales(
    products: Sequence[Product],
    now: datetime,
    rng: random.Random,
    days: int = SAMPLE_DAYS,
) -> list[NewSale]:
    if not products:
        return []

    sales: list[NewSale] = []
    for offset in range(days):
        anchor = now - timedelta(days=offset)
        for _ in range(rng.randint(0, MAX_SALES_PER_DAY)):
            product = rng.choice(products)
            quantity = rng.randint(1, MAX_QUANTITY)
            sale_date = min(anchor + timedelta(seconds=rng.randrange(86_400)), now)
            sales.append(
                NewSale(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price_cents=product.price_cents,
                    total_amount_cents=quantity * product.price_cents,
                    sale_date=sale_date,
                )
            )
    return sales
