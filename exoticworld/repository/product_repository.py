from __future__ import annotations

import logging

from exoticworld.models.product import Product
from exoticworld.models.result import Result
from exoticworld.remote.api_client import ApiService

logger = logging.getLogger(__name__)


class ProductRepository:
    """Product calls with errors folded into ``Result`` (nothing is raised)."""

    def __init__(self, api: ApiService) -> None:
        self._api = api

    async def get_products(self) -> Result:
        try:
            return Result.success(await self._api.get_products())
        except Exception as e:
            logger.warning("get_products failed: %s", e)
            return Result.failure(e)

    async def get_product(self, product_id: int) -> Result:
        try:
            return Result.success(await self._api.get_product(product_id))
        except Exception as e:
            logger.warning("get_product(%s) failed: %s", product_id, e)
            return Result.failure(e)

    async def search_products(self, name: str) -> Result:
        try:
            return Result.success(await self._api.search_products(name))
        except Exception as e:
            logger.warning("search_products(%r) failed: %s", name, e)
            return Result.failure(e)

    async def create_product(self, product: Product) -> Result:
        try:
            return Result.success(await self._api.create_product(product))
        except Exception as e:
            logger.warning("create_product failed: %s", e)
            return Result.failure(e)

    async def update_product(self, product_id: int, product: Product) -> Result:
        try:
            return Result.success(await self._api.update_product(product_id, product))
        except Exception as e:
            logger.warning("update_product(%s) failed: %s", product_id, e)
            return Result.failure(e)

    async def delete_product(self, product_id: int) -> Result:
        try:
            await self._api.delete_product(product_id)
            return Result.success()
        except Exception as e:
            logger.warning("delete_product(%s) failed: %s", product_id, e)
            return Result.failure(e)
