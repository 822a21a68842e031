from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import OrderType, TransactionType


def as_utc(value: datetime) -> datetime:
    # naive values are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class OrderLineInput(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class OrderInput(BaseModel):
    customer_name: str = Field(max_length=100)
    order_time: datetime
    items: List[OrderLineInput] = Field(min_length=1)
    order_type: OrderType = OrderType.TAKE_OUT
    table_id: Optional[int] = None

    @field_validator("order_time", mode="before")
    @classmethod
    def parse_order_time(cls, value: datetime | date | str) -> datetime:
        if isinstance(value, datetime):
            return as_utc(value)
        if isinstance(value, date):
            return datetime.combine(value, datetime.min.time(), tzinfo=timezone.utc)
        if isinstance(value, str):
            return as_utc(datetime.fromisoformat(value))
        raise ValueError("order_time must be an ISO 8601 string, a date or a datetime")

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))


class OrderCreated(BaseModel):
    order_id: int
    total: Decimal


class SaveOutcome(BaseModel):
    """Success with the new order id, or failure with the cause."""

    ok: bool
    order_id: Optional[int] = None
    error: Optional[str] = None


class TransactionInput(BaseModel):
    order_id: int
    transaction_type: TransactionType
    transaction_time: Optional[datetime] = None
    address: Optional[str] = Field(default=None, max_length=255)
    delivery_fee: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    pickup_time: Optional[str] = Field(default=None, max_length=20)

    @field_validator("transaction_time")
    @classmethod
    def normalize_transaction_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    @model_validator(mode="after")
    def check_fields_match_type(self) -> "TransactionInput":
        kind = self.transaction_type
        has_delivery = self.address is not None or self.delivery_fee is not None
        if kind is TransactionType.DINE_IN and (has_delivery or self.pickup_time is not None):
            raise ValueError("DineIn transactions take no address, delivery fee or pickup time")
        if kind is TransactionType.ONLINE:
            if self.address is None or self.delivery_fee is None:
                raise ValueError("Online transactions require an address and a delivery fee")
            if self.pickup_time is not None:
                raise ValueError("Online transactions take no pickup time")
        if kind is TransactionType.TAKE_OUT:
            if self.pickup_time is None:
                raise ValueError("TakeOut transactions require a pickup time")
            if has_delivery:
                raise ValueError("TakeOut transactions take no address or delivery fee")
        return self


class TransactionCreated(BaseModel):
    transaction_id: int
