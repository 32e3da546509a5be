"""
Products Service Module

Month-scoped queries and reports over the seeded product-sale records:
paginated search, sold/unsold statistics, a price-range histogram and a
category breakdown. Every function re-applies the month filter with a fresh
query against the store it is given.
"""

import asyncio
import logging
import math
from typing import Iterable, List, Optional

from tortoise.expressions import Q
from tortoise.functions import Count, Sum

from ...core.exceptions import ProductQueryError
from .schemas import (
    CategoryBreakdownResponse, CombinedReportResponse, PriceRangeCount,
    ProductPageResponse, ProductTransactionResponse, StatisticsResponse
)
from .store import ProductStore

logger = logging.getLogger(__name__)

# Upper bounds (inclusive) of the first nine buckets; anything above 900
# lands in the last one.
PRICE_BUCKET_UPPER_BOUNDS = (100, 200, 300, 400, 500, 600, 700, 800, 900)
PRICE_RANGE_LABELS = (
    "0 - 100",
    "101 - 200",
    "201 - 300",
    "301 - 400",
    "401 - 500",
    "501 - 600",
    "601 - 700",
    "701 - 800",
    "801 - 900",
    "901 - above",
)


def month_token(month: str) -> str:
    """
    Formats the month the way it appears inside ``date_of_sale``.

    Numeric input is left-zero-padded to two digits ("3" -> "03").
    Anything else is returned untouched; it will simply match nothing.
    """
    if month.isdecimal():
        return f"{int(month):02d}"
    return month


def month_filter(month: str) -> Q:
    """Matches records whose ``YYYY-MM-DD...`` date has the given month segment."""
    return Q(date_of_sale__contains=f"-{month_token(month)}-")


def parse_price_search(search: str) -> Optional[float]:
    """Returns the search term as a price if the whole term is a finite number."""
    try:
        value = float(search)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def build_search_filter(month: str, search: Optional[str] = None) -> Q:
    """
    Combines the month filter with the free-text search term.

    - empty or missing term: month only
    - numeric term: exact price match
    - anything else: case-insensitive substring of title or description
    """
    query_filter = month_filter(month)
    if not search:
        return query_filter

    price = parse_price_search(search)
    if price is not None:
        return query_filter & Q(price=price)
    return query_filter & (Q(title__icontains=search) | Q(description__icontains=search))


def price_range_label(price: float) -> str:
    for upper_bound, label in zip(PRICE_BUCKET_UPPER_BOUNDS, PRICE_RANGE_LABELS):
        if price <= upper_bound:
            return label
    return PRICE_RANGE_LABELS[-1]


def bucket_prices(prices: Iterable[float]) -> List[PriceRangeCount]:
    """Counts prices per range; all ten ranges are returned, in order."""
    counts = dict.fromkeys(PRICE_RANGE_LABELS, 0)
    for price in prices:
        counts[price_range_label(price)] += 1
    return [PriceRangeCount(range=label, count=counts[label]) for label in PRICE_RANGE_LABELS]


async def search_products(
    store: ProductStore,
    month: str,
    search: Optional[str] = None,
    page: int = 1,
    per_page: int = 10,
) -> ProductPageResponse:
    """
    Returns one page of the month's records matching ``search``.

    Args:
        store: Handle on the product collection
        month: Month number, as given by the caller (not validated)
        search: Optional price or title/description fragment
        page: 1-based page number
        per_page: Page size

    Returns:
        ProductPageResponse: the page in ``data`` and, in ``total_records``,
        the size of the whole filtered set before pagination.
    """
    query_filter = build_search_filter(month, search)
    offset = (page - 1) * per_page
    try:
        items = await store.filter(query_filter).order_by("id").offset(offset).limit(per_page)
        total = await store.filter(query_filter).count()
    except Exception as e:
        logger.error(f"Error searching products for month={month!r} search={search!r}: {e}", exc_info=True)
        raise ProductQueryError(str(e)) from e

    return ProductPageResponse(
        data=[ProductTransactionResponse.model_validate(item) for item in items],
        total_records=total,
    )


async def generate_statistics(store: ProductStore, month: str) -> StatisticsResponse:
    """
    Counts sold and unsold records for the month and totals their prices.

    A month without sold (or unsold) records produces no group row for it;
    that side then contributes a count of 0 and an amount of 0.00.
    """
    try:
        rows = await (
            store.filter(month_filter(month))
            .annotate(count=Count("id"), amount=Sum("price"))
            .group_by("sold")
            .values("sold", "count", "amount")
        )
    except Exception as e:
        logger.error(f"Error computing statistics for month={month!r}: {e}", exc_info=True)
        raise ProductQueryError(str(e)) from e

    groups = {True: (0, 0.0), False: (0, 0.0)}
    for row in rows:
        groups[bool(row["sold"])] = (row["count"] or 0, row["amount"] or 0.0)

    sold_count, sold_amount = groups[True]
    not_sold_count, not_sold_amount = groups[False]
    return StatisticsResponse(
        total_sale_amount=round(sold_amount, 2) + round(not_sold_amount, 2),
        total_sold=sold_count,
        total_not_sold=not_sold_count,
    )


async def generate_price_histogram(store: ProductStore, month: str) -> List[PriceRangeCount]:
    try:
        prices = await store.filter(month_filter(month)).values_list("price", flat=True)
    except Exception as e:
        logger.error(f"Error building price histogram for month={month!r}: {e}", exc_info=True)
        raise ProductQueryError(str(e)) from e
    return bucket_prices(prices)


async def generate_category_breakdown(store: ProductStore, month: str) -> CategoryBreakdownResponse:
    try:
        rows = await (
            store.filter(month_filter(month))
            .annotate(count=Count("id"))
            .group_by("category")
            .values("category", "count")
        )
    except Exception as e:
        logger.error(f"Error building category breakdown for month={month!r}: {e}", exc_info=True)
        raise ProductQueryError(str(e)) from e
    return CategoryBreakdownResponse(total={row["category"]: row["count"] for row in rows})


async def generate_combined_report(store: ProductStore, month: str) -> CombinedReportResponse:
    """Runs the three month reports concurrently and merges them."""
    statistics, barchart, piechart = await asyncio.gather(
        generate_statistics(store, month),
        generate_price_histogram(store, month),
        generate_category_breakdown(store, month),
    )
    return CombinedReportResponse(statistics=statistics, barchart=barchart, piechart=piechart)
