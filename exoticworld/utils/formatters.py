from decimal import Decimal
from html import escape
from typing import Iterable

from exoticworld.config import settings
from exoticworld.models.cart import CartItem
from exoticworld.models.product import Product


def money(v: Decimal | float) -> str:
    return f"{float(v):,.{settings.decimals}f} {settings.currency}"


def product_line(p: Product) -> str:
    return f"• <b>#{p.product_id}</b> {escape(p.name)} — {money(p.price)}"


def product_detail(p: Product) -> str:
    return (
        f"<b>{escape(p.name)}</b> (#{p.product_id})\n"
        f"{escape(p.description)}\n\n"
        f"Precio: {money(p.price)}\n"
        f"Agregar: /add {p.product_id}"
    )


def cart_text(items: Iterable[CartItem], total: Decimal) -> str:
    items = list(items)
    if not items:
        return "🧺 Tu carrito está vacío."
    lines = ["<b>🧺 Mi carrito:</b>"]
    for it in items:
        lines.append(
            f"• #{it.product.product_id} {escape(it.product.name)} × {it.quantity} = {money(it.subtotal)}"
        )
    lines.append("")
    lines.append(f"<b>Total: {money(total)}</b>")
    return "\n".join(lines)
