"""Order amount calculation.

Amounts are integers in the currency's minor unit. Prices for catalogue items
always come from the server-side table; an item's own unit price is only used
for ids the catalogue does not list.
"""

from typing import Mapping, Optional, Sequence

from pydantic import AliasChoices, BaseModel, Field


class OrderItem(BaseModel):
    id: str
    quantity: int = Field(default=1, ge=0, validation_alias=AliasChoices("quantity", "qty"))
    unit_price: Optional[int] = Field(
        default=None, ge=0, validation_alias=AliasChoices("unit_price", "unitPrice"),
    )


class PriceTable:
    """Fixed item-id -> price lookup."""

    def __init__(
        self,
        prices: Mapping[str, int],
        default_price: int = 0,
        empty_order_amount: int = 1400,
    ):
        self._prices = dict(prices)
        self.default_price = default_price
        self.empty_order_amount = empty_order_amount

    def price_of(self, item: OrderItem) -> int:
        if item.id in self._prices:
            return self._prices[item.id]
        if item.unit_price is not None:
            return item.unit_price
        return self.default_price

    def calculate_order_amount(self, items: Optional[Sequence[OrderItem]] = None) -> int:
        """Sum price * quantity over the order.

        A request without an item list (off-session charges, for example) is
        charged the fixed empty_order_amount.
        """
        if items is None:
            return self.empty_order_amount
        return sum(self.price_of(item) * item.quantity for item in items)
