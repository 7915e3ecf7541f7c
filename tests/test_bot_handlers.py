"""
Tests for the chat handlers with a mocked Message.

The handlers are thin: parse arguments, run one controller action, render
the resulting state and show the transient notice once.
"""
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from aiogram.filters import CommandObject

from exoticworld.bot import handlers
from exoticworld.config import settings
from exoticworld.models.product import Product
from exoticworld.models.result import Result
from exoticworld.models.ui_state import Success

from conftest import USER_ID, make_item, product_json


def _message(text=""):
    message = AsyncMock()
    message.text = text
    message.from_user = SimpleNamespace(id=settings.admin_id)
    return message


def _command(name, args=None):
    return CommandObject(prefix="/", command=name, args=args)


def _answers(message):
    return [call.args[0] for call in message.answer.await_args_list]


@pytest.mark.asyncio
async def test_add_renders_reloaded_cart(controller, cart_repo):
    controller.user_id.set(USER_ID)
    cart_repo.add_product.return_value = Result.success(None)
    cart_repo.get_items.return_value = Result.success([make_item(1, 2, 100.0)])
    cart_repo.get_total.return_value = Result.success(Decimal("200"))
    message = _message()

    await handlers.cmd_add(message, _command("add", "1 2"), controller)

    cart_repo.add_product.assert_awaited_once_with(USER_ID, 1, 2)
    answers = _answers(message)
    assert len(answers) == 1
    assert "× 2" in answers[0]


@pytest.mark.asyncio
async def test_add_with_bad_arguments_shows_usage(controller, cart_repo):
    controller.user_id.set(USER_ID)
    message = _message()

    await handlers.cmd_add(message, _command("add", "x"), controller)

    cart_repo.add_product.assert_not_awaited()
    assert _answers(message) == ["Formato: /add ID [CANTIDAD]"]


@pytest.mark.asyncio
async def test_failed_mutation_shows_notice_once(controller, cart_repo):
    controller.user_id.set(USER_ID)
    cart_repo.remove_item.return_value = Result.failure(RuntimeError("sin conexión"))
    message = _message()

    await handlers.cmd_remove(message, _command("remove", "4"), controller)

    assert _answers(message) == ["⚠️ Error al eliminar: sin conexión"]
    assert controller.error_message.value is None


@pytest.mark.asyncio
async def test_products_error_offers_retry(controller, product_repo):
    product_repo.get_products.return_value = Result.failure(RuntimeError("caído"))
    message = _message()

    await handlers.cmd_products(message, controller)

    answers = _answers(message)
    assert "Reintentar: /products" in answers[0]
    assert answers[1] == "⚠️ Error: caído"


@pytest.mark.asyncio
async def test_non_admin_is_ignored(controller, product_repo):
    message = _message()
    message.from_user = SimpleNamespace(id=settings.admin_id + 1)

    await handlers.cmd_products(message, controller)

    product_repo.get_products.assert_not_awaited()
    message.answer.assert_not_awaited()


@pytest.mark.asyncio
async def test_products_shows_catalog_while_search_is_active(controller, product_repo):
    catalog = [Product.model_validate(product_json(1, "Iguana verde"))]
    product_repo.get_products.return_value = Result.success(catalog)
    controller.search_state.set(Success((Product.model_validate(product_json(2, "Tortuga")),)))
    message = _message()

    await handlers.cmd_products(message, controller)

    answers = _answers(message)
    assert "Iguana verde" in answers[0]
    assert "Tortuga" not in answers[0]
