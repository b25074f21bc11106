"""Pydantic schemas for orders and request/response bodies."""

import math
import uuid
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

OrderStatus = Literal["", "Pending", "Approved", "Shipped", "Cancelled"]
STATUS_CHOICES = ("Pending", "Approved", "Shipped", "Cancelled")
DEFAULT_STATUS = "Pending"

Number = Union[int, float]


def _new_id() -> str:
    return str(uuid.uuid4())


def to_number(value: Any) -> Number:
    """Numeric form of a field the UI may send blank or as text; anything unusable is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return 0
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return 0


def order_total(lines: Iterable["OrderLine"]) -> Number:
    """Sum of line amounts; the one place an order total is computed."""
    return sum((line.amount or 0) for line in lines)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in the orders document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null counts as missing so blank/zero defaults apply
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Address(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


class OrderLine(CamelModel):
    id: str = Field(default_factory=_new_id)
    item: str = "Unknown item"
    units: str = ""
    quantity: Number = 0
    price: Number = 0
    amount: Number = 0

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("quantity", "price", "amount", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Number:
        return to_number(value)


class HistoryEntry(CamelModel):
    timestamp: str = ""
    event: str = ""


class Order(CamelModel):
    """A purchase/shipping order as stored in the orders document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[str] = None
    order_number: str = ""
    customer: str = ""
    transaction_date: str = ""
    status: OrderStatus = DEFAULT_STATUS
    from_location: str = ""
    to_location: str = ""
    pending_approval_reason_code: List[str] = Field(default_factory=list)
    support_rep: str = ""
    incoterm: str = ""
    freight_terms: str = ""
    total_ship_unit_count: Number = 0
    total_quantity: Number = 0
    discount_rate: Number = 0
    billing_address: Address = Field(default_factory=Address)
    shipping_address: Address = Field(default_factory=Address)
    early_pickup_date: str = ""
    late_pickup_date: str = ""
    amount: Number = 0
    lines: List[OrderLine] = Field(default_factory=list)
    history: List[HistoryEntry] = Field(default_factory=list)

    @field_validator("id", "order_number", "transaction_date", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    @field_validator("discount_rate", "amount", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Number:
        return to_number(value)

    @field_validator("total_ship_unit_count", "total_quantity", mode="before")
    @classmethod
    def _count(cls, value: Any) -> Number:
        # counts never go below zero
        return max(to_number(value), 0)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        if value in STATUS_CHOICES:
            return value
        return DEFAULT_STATUS

    @field_validator("billing_address", "shipping_address", mode="before")
    @classmethod
    def _upconvert_address(cls, value: Any) -> Any:
        # legacy documents store addresses as a single line of text
        if isinstance(value, str):
            return {"street": value}
        return value

    @field_validator("pending_approval_reason_code", mode="before")
    @classmethod
    def _unique_codes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value] if value else []
        if isinstance(value, (list, tuple)):
            return list(dict.fromkeys(value))
        return value

    @model_validator(mode="after")
    def _sync_amount(self) -> "Order":
        if self.lines:
            self.amount = order_total(self.lines)
        return self

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict in the orders document shape."""
        return self.model_dump(mode="json", by_alias=True)


class OrderCreate(Order):
    order_number: str

    @field_validator("order_number")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Order number is required")
        return value


class StatusUpdate(BaseModel):
    status: Optional[OrderStatus] = None


class DeleteResult(BaseModel):
    message: str
    deleted: int


class CustomerTotals(CamelModel):
    count: int = 0
    amount: Number = 0


class OrdersSummary(CamelModel):
    total_orders: int
    total_amount: Number
    average_amount: Number
    unique_customers: int
    by_status: Dict[str, int]
    by_customer: Dict[str, CustomerTotals]


def coerce_order(raw: Any) -> Order:
    """Upconvert a raw or legacy order record into an ``Order``."""
    if isinstance(raw, Order):
        return raw
    return Order.model_validate(raw)
