from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Awaitable, Optional, Set

from exoticworld.constants import DEFAULT_QUANTITY
from exoticworld.db.preferences import UserPreferences
from exoticworld.models.result import Result
from exoticworld.models.ui_state import IDLE, LOADING, Error, Success, UiState
from exoticworld.repository.cart_repository import CartRepository
from exoticworld.repository.product_repository import ProductRepository
from exoticworld.services.pricing import local_total
from exoticworld.services.state import StateSlot

logger = logging.getLogger(__name__)


class ShopController:
    """Observable state for catalog, search and cart, plus the actions on it.

    Every action runs as its own task and returns it (``None`` when the
    action is skipped without touching the network). After any successful
    cart mutation the cart is fetched again from the server instead of being
    patched locally. Overlapping mutations are not serialized: whichever
    reload lands last is what ``cart_state`` shows.
    """

    def __init__(
        self,
        products: ProductRepository,
        cart: CartRepository,
        preferences: UserPreferences,
    ) -> None:
        self._products = products
        self._cart = cart
        self._preferences = preferences
        self._tasks: Set[asyncio.Task] = set()

        self.products_state = StateSlot("products_state", IDLE)
        self.search_state = StateSlot("search_state", IDLE)
        self.product_state = StateSlot("product_state", IDLE)
        self.cart_state = StateSlot("cart_state", IDLE)
        self.cart_total = StateSlot("cart_total", Decimal("0"))
        self.error_message = StateSlot("error_message", None)
        self.user_id = StateSlot("user_id", None)

    def _launch(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _notify(self, message: str) -> None:
        logger.info("notice: %s", message)
        self.error_message.set(message)

    async def start(self) -> None:
        self.user_id.set(self._preferences.user_id())
        pending = [t for t in (self.load_catalog(), self.load_cart()) if t is not None]
        await asyncio.gather(*pending)

    async def aclose(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # ---------------- productos ----------------

    def load_catalog(self) -> asyncio.Task:
        self.products_state.set(LOADING)
        return self._launch(self._load_catalog())

    async def _load_catalog(self) -> None:
        result = await self._products.get_products()
        if result.ok:
            self.products_state.set(Success(tuple(result.value)))
        else:
            self.products_state.set(Error(result.message or "Error al cargar productos"))
            self._notify(f"Error: {result.message}")

    def search_products(self, query: str) -> Optional[asyncio.Task]:
        if not query or not query.strip():
            self.search_state.set(IDLE)
            return None
        self.search_state.set(LOADING)
        return self._launch(self._search(query))

    async def _search(self, query: str) -> None:
        result = await self._products.search_products(query)
        if result.ok:
            self.search_state.set(Success(tuple(result.value)))
        else:
            self.search_state.set(Error(result.message or "Error en búsqueda"))
            self._notify(f"Error de búsqueda: {result.message}")

    def clear_search(self) -> None:
        self.search_state.set(IDLE)

    def displayed_products(self) -> UiState:
        """Search results while a search is active, the full catalog otherwise."""
        search = self.search_state.value
        if search != IDLE:
            return search
        return self.products_state.value

    def load_product(self, product_id: int) -> asyncio.Task:
        self.product_state.set(LOADING)
        return self._launch(self._load_product(product_id))

    async def _load_product(self, product_id: int) -> None:
        result = await self._products.get_product(product_id)
        if result.ok:
            self.product_state.set(Success(result.value))
        else:
            self.product_state.set(Error(result.message or "Error al cargar producto"))

    # ---------------- carrito ----------------

    def load_cart(self) -> Optional[asyncio.Task]:
        user_id = self.user_id.value
        if not user_id:
            return None
        self.cart_state.set(LOADING)
        return self._launch(self._load_cart(user_id))

    async def _load_cart(self, user_id: str) -> None:
        result = await self._cart.get_items(user_id)
        if result.ok:
            self.cart_state.set(Success(tuple(result.value)))
            await self._compute_total(user_id)
        else:
            self.cart_state.set(Error(result.message or "Error al cargar carrito"))
            self._notify(f"Error carrito: {result.message}")

    async def _compute_total(self, user_id: str) -> None:
        try:
            result = await self._cart.get_total(user_id)
        except Exception as e:
            logger.warning("server total raised, using local total: %s", e)
            result = Result.failure(e)
        if result.ok:
            self.cart_total.set(Decimal(result.value))
        else:
            self.cart_total.set(self._local_total())

    def _local_total(self) -> Decimal:
        state = self.cart_state.value
        if isinstance(state, Success):
            return local_total(state.data)
        return Decimal("0")

    def _mutate(self, call, label: str) -> Optional[asyncio.Task]:
        user_id = self.user_id.value
        if not user_id:
            return None
        return self._launch(self._run_mutation(call(user_id), label))

    async def _run_mutation(self, pending: Awaitable[Result], label: str) -> None:
        result = await pending
        if result.ok:
            reload = self.load_cart()
            if reload is not None:
                await reload
        else:
            # cart_state se deja como estaba
            self._notify(f"{label}: {result.message}")

    def add_to_cart(self, product_id: int, quantity: int = DEFAULT_QUANTITY) -> Optional[asyncio.Task]:
        return self._mutate(
            lambda uid: self._cart.add_product(uid, product_id, quantity),
            "Error al agregar",
        )

    def decrement(self, product_id: int) -> Optional[asyncio.Task]:
        return self._mutate(
            lambda uid: self._cart.decrement_product(uid, product_id),
            "Error al decrementar",
        )

    def update_quantity(self, product_id: int, quantity: int) -> Optional[asyncio.Task]:
        return self._mutate(
            lambda uid: self._cart.update_quantity(uid, product_id, quantity),
            "Error al actualizar cantidad",
        )

    def remove_item(self, product_id: int) -> Optional[asyncio.Task]:
        return self._mutate(
            lambda uid: self._cart.remove_item(uid, product_id),
            "Error al eliminar",
        )

    def clear_cart(self) -> Optional[asyncio.Task]:
        return self._mutate(self._cart.clear_cart, "Error al vaciar carrito")

    def consume_error_message(self) -> Optional[str]:
        message = self.error_message.value
        self.error_message.set(None)
        return message

    # ---------------- usuario ----------------

    def set_user_id(self, user_id: str) -> Optional[asyncio.Task]:
        user_id = user_id.strip()
        if not user_id:
            return None
        self._preferences.save_user_id(user_id)
        self.user_id.set(user_id)
        return self.load_cart()

    def reset_user(self) -> Optional[asyncio.Task]:
        self._preferences.clear()
        self.user_id.set(self._preferences.user_id())
        return self.load_cart()
