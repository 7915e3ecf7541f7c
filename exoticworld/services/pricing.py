from decimal import Decimal
from typing import Iterable

from exoticworld.models.cart import CartItem


def local_total(items: Iterable[CartItem]) -> Decimal:
    return sum((item.subtotal for item in items), Decimal("0"))
