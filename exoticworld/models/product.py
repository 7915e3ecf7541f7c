from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Product(BaseModel):
    """Producto tal como llega del backend (los alias son los nombres del JSON)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: int = Field(alias="producto_id")
    name: str = Field(alias="nombreProducto")
    description: str = Field(default="", alias="descripcionProducto")
    price: Decimal = Field(alias="precioProducto")  # pesos chilenos

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> int | float:
        # el backend recibe un Double; los pesos enteros viajan como int exacto
        if price == price.to_integral_value():
            return int(price)
        return float(price)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
