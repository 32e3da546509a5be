import logging
from typing import Annotated, List, Optional

import httpx
from fastapi import APIRouter, Depends, Query

from .dependencies import get_seed_client, get_store
from .schemas import (
    CategoryBreakdownResponse, CombinedReportResponse, PriceRangeCount,
    ProductPageResponse, SeedResponse, StatisticsResponse
)
from .store import ProductStore
from . import seed as seed_service
from . import service as product_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Products"],
    responses={400: {"description": "Invalid query or failed read"}},
)

StoreDep = Annotated[ProductStore, Depends(get_store)]
MonthQuery = Annotated[str, Query(description="Month number, 1-12")]


@router.get(
    "/initialize-database",
    response_model=SeedResponse,
    responses={500: {"description": "Seeding failed"}},
    summary="Replace all records with the seed dataset",
)
async def initialize_database(
    store: StoreDep,
    client: Annotated[httpx.AsyncClient, Depends(get_seed_client)],
):
    return await seed_service.seed_products(store, client)


@router.get("/products", response_model=ProductPageResponse, summary="Search a month's records")
async def list_products(
    store: StoreDep,
    month: MonthQuery,
    search: Optional[str] = Query(None, description="Exact price, or title/description fragment"),
    page: int = Query(1, description="Page number"),
    per_page: int = Query(10, description="Number of records per page"),
):
    return await product_service.search_products(store, month, search, page, per_page)


@router.get("/statistics", response_model=StatisticsResponse, summary="Sold/unsold totals for a month")
async def get_statistics(store: StoreDep, month: MonthQuery):
    return await product_service.generate_statistics(store, month)


@router.get("/barchart", response_model=List[PriceRangeCount], summary="Price-range histogram for a month")
async def get_barchart(store: StoreDep, month: MonthQuery):
    return await product_service.generate_price_histogram(store, month)


@router.get("/piechart", response_model=CategoryBreakdownResponse, summary="Records per category for a month")
async def get_piechart(store: StoreDep, month: MonthQuery):
    return await product_service.generate_category_breakdown(store, month)


@router.get(
    "/combined-response",
    response_model=CombinedReportResponse,
    summary="Statistics, bar chart and pie chart in one response",
)
async def get_combined_response(store: StoreDep, month: MonthQuery):
    return await product_service.generate_combined_report(store, month)
