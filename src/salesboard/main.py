import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core import logging_config  # noqa: F401  (installs the "salesboard" handler)
from .core.config import TORTOISE_ORM_CONFIG
from .core.exceptions import exception_handlers
from .features.products.router import router as products_router
from .features.products.store import ProductStore

logger = logging.getLogger("salesboard.main")  # This logger will inherit from 'salesboard'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects Tortoise-ORM, makes sure the products table exists and
    publishes the store handle on ``app.state`` for the route dependencies.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    await Tortoise.generate_schemas(safe=True)
    app.state.product_store = ProductStore("default")
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Salesboard API",
    description="Monthly search and reports over seeded product-sale records.",
    version="0.1.0",
    exception_handlers={**tortoise_exception_handlers(), **exception_handlers()},
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the Salesboard API!"}


app.include_router(products_router)
