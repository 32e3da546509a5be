from collections.abc import AsyncGenerator

import httpx
from fastapi import Request

from ...core.config import SEED_TIMEOUT_SECONDS
from .store import ProductStore


def get_store(request: Request) -> ProductStore:
    """The store handle built by the application lifespan."""
    return request.app.state.product_store


async def get_seed_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(timeout=SEED_TIMEOUT_SECONDS, follow_redirects=True) as client:
        yield client
