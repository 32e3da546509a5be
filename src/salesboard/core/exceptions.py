"""Application errors and the FastAPI handlers that render them.

Reads that fail come back as ``400 {"err": ...}`` with the raw message;
a failed seed comes back as ``500 {"error": ...}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProductQueryError(Exception):
    """A query or aggregation over the product collection failed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SeedError(Exception):
    """Fetching or storing the seed dataset failed."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


async def product_query_error_handler(request: Request, exc: ProductQueryError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"err": exc.message})


async def seed_error_handler(request: Request, exc: SeedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": exc.message}
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"Rejected {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"err": message})


def exception_handlers() -> dict:
    """Handlers to pass to ``FastAPI(exception_handlers=...)``."""
    return {
        ProductQueryError: product_query_error_handler,
        SeedError: seed_error_handler,
        RequestValidationError: request_validation_error_handler,
    }
