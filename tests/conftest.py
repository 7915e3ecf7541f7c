"""
Shared fixtures for the ExoticWorld client tests.

Wire payloads use the backend's JSON field names so the same dicts serve
the DTO tests, the httpx MockTransport tests and the controller tests.
"""
import json
from unittest.mock import AsyncMock

import httpx
import pytest

from exoticworld.db.preferences import UserPreferences
from exoticworld.models.cart import CartItem
from exoticworld.remote.api_client import ApiService
from exoticworld.repository.cart_repository import CartRepository
from exoticworld.repository.product_repository import ProductRepository
from exoticworld.services.shop import ShopController

BASE_URL = "http://testserver/"
USER_ID = "usuario_test_42"


def product_json(product_id=1, name="Iguana verde", description="Reptil", price=100.0):
    return {
        "producto_id": product_id,
        "nombreProducto": name,
        "descripcionProducto": description,
        "precioProducto": price,
    }


def item_json(item_id=1, quantity=1, product=None, user_id=USER_ID):
    return {
        "item_id": item_id,
        "cantidad": quantity,
        "carrito": {"carrito_id": 10, "usuarioId": user_id},
        "producto": product or product_json(),
    }


def make_item(item_id=1, quantity=1, price=100.0, product_id=1) -> CartItem:
    return CartItem.model_validate(
        item_json(item_id, quantity, product_json(product_id=product_id, price=price))
    )


def json_response(status_code, payload=None):
    if payload is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, content=json.dumps(payload).encode())


@pytest.fixture
def make_api():
    """Build an ApiService whose requests are answered by ``handler``."""

    def _make(handler) -> ApiService:
        return ApiService(base_url=BASE_URL, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def preferences(tmp_path):
    return UserPreferences(str(tmp_path / "prefs.db"))


@pytest.fixture
def product_repo():
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def cart_repo():
    return AsyncMock(spec=CartRepository)


@pytest.fixture
def controller(product_repo, cart_repo, preferences):
    return ShopController(product_repo, cart_repo, preferences)
