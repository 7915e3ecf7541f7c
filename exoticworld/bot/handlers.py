from __future__ import annotations

from html import escape

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove

from exoticworld.bot.keyboards import main_kb
from exoticworld.bot.states import SearchInput, UserInput
from exoticworld.config import settings
from exoticworld.models.ui_state import Error, Idle, Loading, Success, UiState
from exoticworld.services.shop import ShopController
from exoticworld.utils.formatters import cart_text, product_detail, product_line
from exoticworld.utils.validators import require_positive_int

router = Router()


def _is_admin(message: Message) -> bool:
    try:
        return int(message.from_user.id) == int(settings.admin_id)
    except Exception:
        return False


async def _done(task) -> None:
    if task is not None:
        await task


async def _show_notice(message: Message, controller: ShopController) -> None:
    notice = controller.consume_error_message()
    if notice:
        await message.answer(f"⚠️ {notice}")


def _products_text(state: UiState, retry: str) -> str:
    if isinstance(state, Success):
        if not state.data:
            return "No hay productos."
        return "\n".join(product_line(p) for p in state.data)
    if isinstance(state, Error):
        return f"❌ {escape(state.message)}\nReintentar: {retry}"
    if isinstance(state, Loading):
        return "⏳ Cargando..."
    return "Sin datos todavía."


def _parse_product_id(command: CommandObject) -> int | None:
    try:
        return require_positive_int((command.args or "").split()[0], "productoId")
    except (IndexError, ValueError):
        return None


async def _show_cart(message: Message, controller: ShopController) -> None:
    state = controller.cart_state.value
    if isinstance(state, Success):
        await message.answer(cart_text(state.data, controller.cart_total.value))
    elif isinstance(state, Error):
        await message.answer(f"❌ {escape(state.message)}\nReintentar: /cart")


@router.message(Command("start"))
async def cmd_start(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    await message.answer(
        f"🦎 ExoticWorld\nUsuario: <b>{escape(controller.user_id.value or '')}</b>\n/help — comandos",
        reply_markup=main_kb(),
    )


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer("❎ Cancelado.", reply_markup=ReplyKeyboardRemove())


@router.message(Command("help"))
async def cmd_help(message: Message):
    if not _is_admin(message):
        return

    text = (
        "<b>ExoticWorld — comandos</b>\n\n"
        "<b>Productos</b>\n"
        "/products — catálogo\n"
        "/product ID — detalle\n"
        "/search TEXTO — buscar por nombre\n"
        "/clear_search — volver al catálogo completo\n\n"
        "<b>Carrito</b>\n"
        "/cart — ver carrito y total\n"
        "/add ID [CANTIDAD] — agregar\n"
        "/dec ID — quitar uno\n"
        "/qty ID CANTIDAD — cambiar cantidad\n"
        "/remove ID — eliminar item\n"
        "/empty — vaciar carrito\n\n"
        "<b>Usuario</b>\n"
        "/user — ver usuario\n"
        "/user ID — cambiar usuario\n"
        "/user_reset — volver al usuario por defecto\n"
        "/cancel — cancelar"
    )
    await message.answer(text)


# ---------------- productos ----------------

@router.message(Command("products"))
async def cmd_products(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    await controller.load_catalog()
    await message.answer(_products_text(controller.products_state.value, "/products"))
    await _show_notice(message, controller)


@router.message(Command("product"))
async def cmd_product(message: Message, command: CommandObject, controller: ShopController):
    if not _is_admin(message):
        return

    product_id = _parse_product_id(command)
    if product_id is None:
        await message.answer("Formato: /product ID")
        return

    await controller.load_product(product_id)
    state = controller.product_state.value
    if isinstance(state, Success):
        await message.answer(product_detail(state.data))
    elif isinstance(state, Error):
        await message.answer(f"❌ {escape(state.message)}")


async def _run_search(message: Message, controller: ShopController, query: str) -> None:
    await _done(controller.search_products(query))
    state = controller.search_state.value
    if isinstance(state, Idle):
        await message.answer(_products_text(controller.displayed_products(), "/products"))
    else:
        await message.answer(_products_text(state, f"/search {query.strip()}"))
    await _show_notice(message, controller)


@router.message(Command("search"))
async def cmd_search(message: Message, command: CommandObject, state: FSMContext, controller: ShopController):
    if not _is_admin(message):
        return

    if command.args and command.args.strip():
        await _run_search(message, controller, command.args)
        return

    await state.set_state(SearchInput.waiting_query)
    await message.answer("🔎 Escribe el nombre a buscar.\nCancelar: /cancel", reply_markup=ReplyKeyboardRemove())


@router.message(SearchInput.waiting_query, F.text, ~F.text.startswith("/"))
async def search_wait_query(message: Message, state: FSMContext, controller: ShopController):
    if not _is_admin(message):
        return
    await state.clear()
    await _run_search(message, controller, message.text)


@router.message(Command("clear_search"))
async def cmd_clear_search(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    controller.clear_search()
    await message.answer(_products_text(controller.displayed_products(), "/products"))


# ---------------- carrito ----------------

@router.message(Command("cart"))
async def cmd_cart(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    await _done(controller.load_cart())
    await _show_cart(message, controller)
    await _show_notice(message, controller)


@router.message(Command("add"))
async def cmd_add(message: Message, command: CommandObject, controller: ShopController):
    if not _is_admin(message):
        return

    parts = (command.args or "").split()
    try:
        product_id = require_positive_int(parts[0], "productoId")
        qty = require_positive_int(parts[1], "cantidad") if len(parts) > 1 else 1
    except (IndexError, ValueError):
        await message.answer("Formato: /add ID [CANTIDAD]")
        return

    await _done(controller.add_to_cart(product_id, qty))
    await _show_cart(message, controller)
    await _show_notice(message, controller)


@router.message(Command("dec"))
async def cmd_dec(message: Message, command: CommandObject, controller: ShopController):
    if not _is_admin(message):
        return

    product_id = _parse_product_id(command)
    if product_id is None:
        await message.answer("Formato: /dec ID")
        return

    await _done(controller.decrement(product_id))
    await _show_cart(message, controller)
    await _show_notice(message, controller)


@router.message(Command("qty"))
async def cmd_qty(message: Message, command: CommandObject, controller: ShopController):
    if not _is_admin(message):
        return

    parts = (command.args or "").split()
    try:
        product_id = require_positive_int(parts[0], "productoId")
        qty = require_positive_int(parts[1], "cantidad")
    except (IndexError, ValueError):
        await message.answer("Formato: /qty ID CANTIDAD")
        return

    await _done(controller.update_quantity(product_id, qty))
    await _show_cart(message, controller)
    await _show_notice(message, controller)


@router.message(Command("remove"))
async def cmd_remove(message: Message, command: CommandObject, controller: ShopController):
    if not _is_admin(message):
        return

    product_id = _parse_product_id(command)
    if product_id is None:
        await message.answer("Formato: /remove ID")
        return

    await _done(controller.remove_item(product_id))
    await _show_cart(message, controller)
    await _show_notice(message, controller)


@router.message(Command("empty"))
async def cmd_empty(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    await _done(controller.clear_cart())
    await _show_cart(message, controller)
    await _show_notice(message, controller)


# ---------------- usuario ----------------

@router.message(Command("user"))
async def cmd_user(message: Message, command: CommandObject, state: FSMContext, controller: ShopController):
    if not _is_admin(message):
        return

    if command.args and command.args.strip():
        await _done(controller.set_user_id(command.args))
        await message.answer(f"✅ Usuario: <b>{escape(controller.user_id.value or '')}</b>")
        await _show_notice(message, controller)
        return

    await state.set_state(UserInput.waiting_user_id)
    await message.answer(
        f"Usuario actual: <b>{escape(controller.user_id.value or '')}</b>\n"
        "Escribe un nuevo id o /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(UserInput.waiting_user_id, F.text, ~F.text.startswith("/"))
async def user_wait_id(message: Message, state: FSMContext, controller: ShopController):
    if not _is_admin(message):
        return
    await state.clear()
    await _done(controller.set_user_id(message.text))
    await message.answer(f"✅ Usuario: <b>{escape(controller.user_id.value or '')}</b>")
    await _show_notice(message, controller)


@router.message(Command("user_reset"))
async def cmd_user_reset(message: Message, controller: ShopController):
    if not _is_admin(message):
        return
    await _done(controller.reset_user())
    await message.answer(f"✅ Usuario por defecto: <b>{escape(controller.user_id.value or '')}</b>")
    await _show_notice(message, controller)
