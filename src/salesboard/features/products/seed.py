"""Replaces the product collection with the remote seed dataset."""

import logging
from typing import List

import httpx

from ...core.config import SEED_DATA_URL
from ...core.exceptions import SeedError
from .models import ProductTransaction
from .schemas import ProductTransactionIn, SeedResponse
from .store import ProductStore

logger = logging.getLogger(__name__)


async def fetch_seed_records(client: httpx.AsyncClient, url: str) -> List[ProductTransactionIn]:
    """Downloads the dataset and validates every element of the JSON array."""
    response = await client.get(url)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array from {url}, got {type(payload).__name__}")
    return [ProductTransactionIn.model_validate(item) for item in payload]


async def seed_products(
    store: ProductStore, client: httpx.AsyncClient, url: str = SEED_DATA_URL
) -> SeedResponse:
    """
    Fetches the seed dataset and swaps it in for the stored records.

    Any failure (network, bad payload, storage) is logged and re-raised as a
    SeedError. No rollback is attempted: when the insert fails after the
    delete went through, the collection stays empty.
    """
    logger.info(f"Seeding product collection from {url}")
    try:
        records = await fetch_seed_records(client, url)
        logger.debug(f"Fetched {len(records)} records")
        inserted = await store.replace_all(
            [ProductTransaction(**record.model_dump()) for record in records]
        )
    except Exception as e:
        logger.error(f"Error initializing database from {url}: {e}", exc_info=True)
        raise SeedError() from e

    logger.info(f"Product collection replaced with {inserted} records")
    return SeedResponse(message="Database initialized successfully")
