from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import httpx

from exoticworld.constants import DEFAULT_QUANTITY
from exoticworld.models.cart import Cart, CartItem, CartTotal
from exoticworld.models.result import Result
from exoticworld.remote.api_client import ApiError, ApiService

logger = logging.getLogger(__name__)


def _body(response: httpx.Response) -> Any:
    # vacio o "null" -> None
    if not response.content or not response.content.strip():
        return None
    return response.json()


def _status_error(label: str, response: httpx.Response) -> ApiError:
    return ApiError(response.status_code, f"{label}: {response.status_code}")


class CartRepository:
    """Cart calls for one user id, returning ``Result`` instead of raising.

    Each method makes exactly one request; there are no retries.
    """

    def __init__(self, api: ApiService) -> None:
        self._api = api

    def _fail(self, op: str, error: BaseException) -> Result:
        logger.warning("%s failed: %s", op, error)
        return Result.failure(error)

    async def get_cart(self, user_id: str) -> Result:
        # el backend crea el carrito en la primera mutacion, puede no existir
        try:
            response = await self._api.get_cart(user_id)
            if not response.is_success:
                return self._fail("get_cart", _status_error("Error al obtener carrito", response))
            data = _body(response)
            return Result.success(Cart.model_validate(data) if data is not None else None)
        except Exception as e:
            return self._fail("get_cart", e)

    async def add_product(self, user_id: str, product_id: int, quantity: int = DEFAULT_QUANTITY) -> Result:
        try:
            response = await self._api.add_to_cart(user_id, product_id, quantity)
            data = _body(response) if response.is_success else None
            if data is None:
                return self._fail("add_product", _status_error("Error al agregar producto", response))
            return Result.success(CartItem.model_validate(data))
        except Exception as e:
            return self._fail("add_product", e)

    async def decrement_product(self, user_id: str, product_id: int) -> Result:
        try:
            response = await self._api.decrement(user_id, product_id)
            if not response.is_success:
                return self._fail("decrement_product", _status_error("Error al decrementar", response))
            # sin body = el item llego a 0 y se elimino, no es un error
            data = _body(response)
            return Result.success(CartItem.model_validate(data) if data is not None else None)
        except Exception as e:
            return self._fail("decrement_product", e)

    async def update_quantity(self, user_id: str, product_id: int, quantity: int) -> Result:
        try:
            response = await self._api.update_quantity(user_id, product_id, quantity)
            data = _body(response) if response.is_success else None
            if data is None:
                return self._fail("update_quantity", _status_error("Error al actualizar cantidad", response))
            return Result.success(CartItem.model_validate(data))
        except Exception as e:
            return self._fail("update_quantity", e)

    async def get_items(self, user_id: str) -> Result:
        try:
            response = await self._api.get_cart_items(user_id)
            if not response.is_success:
                return self._fail("get_items", _status_error("Error al obtener items", response))
            data = _body(response) or []
            return Result.success([CartItem.model_validate(item) for item in data])
        except Exception as e:
            return self._fail("get_items", e)

    async def get_total(self, user_id: str) -> Result:
        try:
            response = await self._api.get_cart_total(user_id)
            if not response.is_success:
                return self._fail("get_total", _status_error("Error al obtener total", response))
            data = _body(response)
            if data is None:
                return Result.success(Decimal("0"))
            return Result.success(CartTotal.model_validate(data).total)
        except Exception as e:
            return self._fail("get_total", e)

    async def clear_cart(self, user_id: str) -> Result:
        try:
            response = await self._api.clear_cart(user_id)
            if not response.is_success:
                return self._fail("clear_cart", _status_error("Error al vaciar carrito", response))
            return Result.success()
        except Exception as e:
            return self._fail("clear_cart", e)

    async def remove_item(self, user_id: str, product_id: int) -> Result:
        try:
            response = await self._api.remove_item(user_id, product_id)
            if not response.is_success:
                return self._fail("remove_item", _status_error("Error al eliminar item", response))
            return Result.success()
        except Exception as e:
            return self._fail("remove_item", e)
