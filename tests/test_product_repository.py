"""
Tests for ProductRepository with a mocked ApiService.

The repository must never raise: every outcome comes back as a Result.
"""
from decimal import Decimal
from unittest.mock import AsyncMock

import httpx
import pytest

from exoticworld.models.product import Product
from exoticworld.remote.api_client import ApiError, ApiService
from exoticworld.repository.product_repository import ProductRepository

from conftest import product_json


@pytest.fixture
def api():
    return AsyncMock(spec=ApiService)


@pytest.fixture
def repository(api):
    return ProductRepository(api)


def _product(product_id, name, description="", price=0.0):
    return Product.model_validate(product_json(product_id, name, description, price))


@pytest.mark.asyncio
async def test_get_products_returns_list_in_order(api, repository):
    expected = [
        _product(1, "Producto Test 1", "Descripción 1", 100.0),
        _product(2, "Producto Test 2", "Descripción 2", 200.0),
    ]
    api.get_products.return_value = expected

    result = await repository.get_products()

    assert result.ok
    assert len(result.value) == 2
    assert result.value[0].name == "Producto Test 1"
    assert result.value == expected
    api.get_products.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_products_failure_keeps_exception_text(api, repository):
    api.get_products.side_effect = RuntimeError("Error de conexión")

    result = await repository.get_products()

    assert not result.ok
    assert isinstance(result.error, RuntimeError)
    assert result.message == "Error de conexión"


@pytest.mark.asyncio
async def test_get_products_non_2xx_message_has_status_code(api, repository):
    api.get_products.side_effect = ApiError(503, "HTTP 503 Service Unavailable")

    result = await repository.get_products()

    assert not result.ok
    assert "503" in result.message


@pytest.mark.asyncio
async def test_get_products_timeout_becomes_failure(api, repository):
    api.get_products.side_effect = httpx.ReadTimeout("read timed out")

    result = await repository.get_products()

    assert not result.ok
    assert "read timed out" in result.message


@pytest.mark.asyncio
async def test_search_passes_exact_query(api, repository):
    api.search_products.return_value = [_product(1, "Alimento Tortuga", "Comida especial", 50.0)]

    result = await repository.search_products("Tortuga")

    assert result.ok
    assert len(result.value) == 1
    assert "Tortuga" in result.value[0].name
    api.search_products.assert_awaited_once_with("Tortuga")


@pytest.mark.asyncio
async def test_get_product_by_id(api, repository):
    api.get_product.return_value = _product(5, "Producto Específico", "Descripción detallada", 150.0)

    result = await repository.get_product(5)

    assert result.ok
    assert result.value.product_id == 5
    assert result.value.name == "Producto Específico"
    api.get_product.assert_awaited_once_with(5)


@pytest.mark.asyncio
async def test_create_update_delete(api, repository):
    product = _product(9, "Camaleón", price=80000.0)
    api.create_product.return_value = product
    api.update_product.return_value = product.model_copy(update={"price": Decimal("75000")})
    api.delete_product.return_value = None

    created = await repository.create_product(product)
    updated = await repository.update_product(9, product)
    deleted = await repository.delete_product(9)

    assert created.ok and created.value == product
    assert updated.ok and updated.value.price == Decimal("75000")
    assert deleted.ok and deleted.value is None
    api.update_product.assert_awaited_once_with(9, product)
    api.delete_product.assert_awaited_once_with(9)


@pytest.mark.asyncio
async def test_delete_failure_is_reported(api, repository):
    api.delete_product.side_effect = ApiError(404, "HTTP 404 Not Found")

    result = await repository.delete_product(1)

    assert not result.ok
    assert result.error.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"", b"null"])
async def test_empty_list_body_is_success(make_api, body):
    repository = ProductRepository(make_api(lambda request: httpx.Response(200, content=body)))

    products = await repository.get_products()
    found = await repository.search_products("x")

    assert products.ok and products.value == []
    assert found.ok and found.value == []
