from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from exoticworld.models.product import Product


class Cart(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cart_id: int = Field(alias="carrito_id")
    user_id: str = Field(alias="usuarioId")


class CartItem(BaseModel):
    """One product/quantity line inside a cart.

    The server deletes the line when its quantity reaches zero, so a parsed
    item always has quantity >= 1.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    item_id: int = Field(alias="item_id")
    quantity: int = Field(alias="cantidad", ge=1)
    cart: Cart = Field(alias="carrito")
    product: Product = Field(alias="producto")

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


class CartTotal(BaseModel):
    total: Decimal = Decimal("0")
