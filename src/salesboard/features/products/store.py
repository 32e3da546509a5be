"""Explicit handle on the product collection.

The service layer never reaches for an implicit default connection: it is
handed a ``ProductStore`` bound to a named Tortoise connection, built once in
the application lifespan (or by a test fixture / CLI command).
"""

import logging
from typing import List

from tortoise import connections
from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.expressions import Q
from tortoise.queryset import QuerySet

from .models import ProductTransaction

logger = logging.getLogger(__name__)


class ProductStore:
    def __init__(self, connection_name: str = "default"):
        self.connection_name = connection_name

    @property
    def db(self) -> BaseDBAsyncClient:
        return connections.get(self.connection_name)

    def all(self) -> QuerySet[ProductTransaction]:
        return ProductTransaction.all().using_db(self.db)

    def filter(self, *args: Q, **kwargs) -> QuerySet[ProductTransaction]:
        return ProductTransaction.filter(*args, **kwargs).using_db(self.db)

    async def count(self) -> int:
        return await self.all().count()

    async def replace_all(self, records: List[ProductTransaction]) -> int:
        """
        Deletes every stored record, then bulk-inserts ``records``.

        The two steps are not atomic: if the insert fails the collection
        is left empty.
        """
        deleted = await self.all().delete()
        logger.debug(f"Deleted {deleted} product records on '{self.connection_name}'")
        await ProductTransaction.bulk_create(records, using_db=self.db)
        return len(records)

    def __repr__(self):
        return f"ProductStore(connection_name={self.connection_name!r})"
