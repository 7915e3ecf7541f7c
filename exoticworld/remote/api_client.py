from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from exoticworld.config import settings
from exoticworld.constants import API_PREFIX, DEFAULT_QUANTITY
from exoticworld.models.product import Product

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the catalog/cart backend."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


async def _log_request(request: httpx.Request) -> None:
    logger.debug("--> %s %s", request.method, request.url)
    if settings.http_log_bodies and request.content:
        logger.debug("--> body %s", request.content.decode("utf-8", "replace"))


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug("<-- %s %s %s", response.status_code, request.method, request.url)
    if settings.http_log_bodies:
        await response.aread()
        logger.debug("<-- body %s", response.text)


class ApiService:
    """Endpoints of the ExoticWorld REST backend.

    Product calls decode the body and raise ``ApiError`` on a non-2xx
    status. Cart calls return the raw ``httpx.Response`` so the repository
    can decide what an empty body means for each operation.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=httpx.Timeout(settings.read_timeout, connect=settings.connect_timeout),
            event_hooks={"request": [_log_request], "response": [_log_response]},
            transport=transport,
        )

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _json_list(response: httpx.Response) -> List[Any]:
        # vacio o "null" -> lista vacia
        if not response.content or not response.content.strip():
            return []
        return response.json() or []

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise ApiError(
            response.status_code,
            f"HTTP {response.status_code} {response.reason_phrase}".strip(),
        )

    # ---------------- productos ----------------

    async def get_products(self) -> List[Product]:
        response = await self._client.get(f"{API_PREFIX}/productos")
        self._raise_for_status(response)
        return [Product.model_validate(p) for p in self._json_list(response)]

    async def get_product(self, product_id: int) -> Product:
        response = await self._client.get(f"{API_PREFIX}/productos/{product_id}")
        self._raise_for_status(response)
        return Product.model_validate(response.json())

    async def search_products(self, name: str) -> List[Product]:
        response = await self._client.get(
            f"{API_PREFIX}/productos/buscar/nombre",
            params={"nombre": name},
        )
        self._raise_for_status(response)
        return [Product.model_validate(p) for p in self._json_list(response)]

    async def create_product(self, product: Product) -> Product:
        response = await self._client.post(f"{API_PREFIX}/productos", json=product.to_wire())
        self._raise_for_status(response)
        return Product.model_validate(response.json())

    async def update_product(self, product_id: int, product: Product) -> Product:
        response = await self._client.put(
            f"{API_PREFIX}/productos/{product_id}",
            json=product.to_wire(),
        )
        self._raise_for_status(response)
        return Product.model_validate(response.json())

    async def delete_product(self, product_id: int) -> None:
        response = await self._client.delete(f"{API_PREFIX}/productos/{product_id}")
        self._raise_for_status(response)

    # ---------------- carrito por usuario ----------------

    def _cart_path(self, user_id: str, action: str = "") -> str:
        path = f"{API_PREFIX}/carrito/usuario/{user_id}"
        return f"{path}/{action}" if action else path

    async def get_cart(self, user_id: str) -> httpx.Response:
        return await self._client.get(self._cart_path(user_id))

    async def add_to_cart(
        self, user_id: str, product_id: int, quantity: int = DEFAULT_QUANTITY
    ) -> httpx.Response:
        return await self._client.post(
            self._cart_path(user_id, "agregar"),
            params={"productoId": product_id, "cantidad": quantity},
        )

    async def decrement(self, user_id: str, product_id: int) -> httpx.Response:
        # al llegar a 0 el backend borra el item y responde sin body
        return await self._client.post(
            self._cart_path(user_id, "decrementar"),
            params={"productoId": product_id},
        )

    async def update_quantity(self, user_id: str, product_id: int, quantity: int) -> httpx.Response:
        return await self._client.put(
            self._cart_path(user_id, "actualizar-cantidad"),
            params={"productoId": product_id, "cantidad": quantity},
        )

    async def get_cart_items(self, user_id: str) -> httpx.Response:
        return await self._client.get(self._cart_path(user_id, "items"))

    async def get_cart_total(self, user_id: str) -> httpx.Response:
        return await self._client.get(self._cart_path(user_id, "total"))

    async def clear_cart(self, user_id: str) -> httpx.Response:
        return await self._client.delete(self._cart_path(user_id, "vaciar"))

    async def remove_item(self, user_id: str, product_id: int) -> httpx.Response:
        return await self._client.delete(
            self._cart_path(user_id, "eliminar-item"),
            params={"productoId": product_id},
        )
