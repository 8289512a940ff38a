"""Cart models with Decimal-based pricing.

Every model is frozen: a transition builds a new ``CartState`` instead of
editing a published one.
"""
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cartstate import config
from cartstate import money

# Opaque item key; compared with ==, so 1 and "1" are different items
ItemId = Union[int, str]


def _price_before(v):
    # floats go through str(); anything else is left to Decimal validation
    if isinstance(v, float):
        return money.to_decimal(v)
    return v


class CartItem(BaseModel):
    """Single product line in the cart."""
    model_config = ConfigDict(frozen=True)

    id: ItemId
    name: str
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _price_before(v)

    @field_validator("image", mode="before")
    @classmethod
    def default_image(cls, v):
        return v or ""

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return money.multiply(self.price, self.quantity)


class CartState(BaseModel):
    """Full cart state: ordered lines plus the two running aggregates."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: tuple[CartItem, ...] = ()
    total_quantity: int = Field(default=0, alias="totalQuantity")
    total_amount: Decimal = Field(default=money.ZERO, alias="totalAmount")

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return money.to_decimal(v)

    @model_validator(mode="after")
    def check_aggregates(self) -> "CartState":
        """Reject states whose aggregates disagree with their lines."""
        if not config.CART_VALIDATE_STATE:
            return self

        seen = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"duplicate item id: {item.id!r}")
            seen.add(item.id)

        expected_quantity = sum(item.quantity for item in self.items)
        if self.total_quantity != expected_quantity:
            raise ValueError(
                f"totalQuantity {self.total_quantity} != sum of quantities {expected_quantity}"
            )

        expected_amount = sum((item.line_total for item in self.items), money.ZERO)
        if not money.amounts_equal(self.total_amount, expected_amount, config.CART_AMOUNT_TOLERANCE):
            raise ValueError(
                f"totalAmount {self.total_amount} != sum of line totals {expected_amount}"
            )
        return self

    @classmethod
    def empty(cls) -> "CartState":
        """The initial cart: no lines, zero aggregates."""
        return cls()

    @classmethod
    def from_items(cls, items) -> "CartState":
        """Build a state from lines, computing the aggregates."""
        items = tuple(items)
        return cls(
            items=items,
            total_quantity=sum(item.quantity for item in items),
            total_amount=sum((item.line_total for item in items), money.ZERO),
        )

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, item_id: ItemId) -> Optional[CartItem]:
        """Return the line with ``item_id``, or None."""
        return next((item for item in self.items if item.id == item_id), None)

    def to_dict(self) -> dict:
        """
        Convert to the external ``{items, totalQuantity, totalAmount}`` shape.

        Amounts (``totalAmount`` and each item ``price``) are written as
        decimal strings such as ``"12.50"`` so they round-trip exactly;
        use ``float(...)`` at the display boundary if a number is needed.
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> "CartState":
        """Create from the external shape produced by ``to_dict``."""
        return cls.model_validate(data)


class AddItemPayload(BaseModel):
    """Payload of an add action; extra keys (e.g. a line's quantity) are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ItemId
    name: str
    price: Decimal = Field(ge=0)
    image: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _price_before(v)


class UpdateQuantityPayload(BaseModel):
    """Payload of a set-quantity action. Any integer is accepted, <= 0 removes."""
    model_config = ConfigDict(frozen=True)

    id: ItemId
    quantity: int
