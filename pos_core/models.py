from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, UniqueConstraint
from sqlalchemy.sql.expression import false
from sqlmodel import Field, SQLModel


class ItemType(str, Enum):
    REGULAR = "Regular"
    BEVERAGE = "Beverage"
    SEASONAL = "Seasonal"


class OrderType(str, Enum):
    ONLINE = "Online"
    TAKE_OUT = "TakeOut"
    DINE_IN = "DineIn"


class TransactionType(str, Enum):
    DINE_IN = "DineIn"
    ONLINE = "Online"
    TAKE_OUT = "TakeOut"


def _one_of(column: str, enum: type[Enum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


class MenuItem(SQLModel, table=True):
    __tablename__ = "menu_items"
    __table_args__ = (
        CheckConstraint(_one_of("item_type", ItemType), name="ck_menu_items_item_type"),
        CheckConstraint("price > 0", name="ck_menu_items_price"),
        CheckConstraint("inventory >= 0", name="ck_menu_items_inventory"),
        UniqueConstraint("name", name="uq_menu_items_name"),
    )

    item_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str = Field(max_length=100, index=True)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    inventory: int = Field(default=0)
    item_type: str = Field(max_length=20)
    is_alcoholic: Optional[bool] = None
    season: Optional[str] = Field(default=None, max_length=50)
    valid_until: Optional[date] = None


class DiningTable(SQLModel, table=True):
    __tablename__ = "dining_tables"
    __table_args__ = (CheckConstraint("seats > 0", name="ck_dining_tables_seats"),)

    table_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    seats: int
    is_reserved: bool = Field(default=False, sa_column_kwargs={"server_default": false()})


class Order(SQLModel, table=True):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(_one_of("order_type", OrderType), name="ck_orders_order_type"),
        # a table is assigned to dine-in orders and to nothing else
        CheckConstraint(
            "(order_type = 'DineIn' AND table_id IS NOT NULL)"
            " OR (order_type IN ('Online', 'TakeOut') AND table_id IS NULL)",
            name="ck_orders_table_for_dine_in",
        ),
    )

    order_id: Optional[int] = Field(default=None, primary_key=True)
    order_type: str = Field(max_length=20)
    table_id: Optional[int] = Field(default=None, foreign_key="dining_tables.table_id")
    is_served: bool = Field(default=False, sa_column_kwargs={"server_default": false()})
    customer_name: Optional[str] = Field(default=None, max_length=100)
    order_time: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class OrderLine(SQLModel, table=True):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
        CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price"),
    )

    order_id: int = Field(
        foreign_key="orders.order_id",
        primary_key=True,
        ondelete="CASCADE",
        sa_column_kwargs={"autoincrement": False},
    )
    item_id: int = Field(
        foreign_key="menu_items.item_id",
        primary_key=True,
        sa_column_kwargs={"autoincrement": False},
    )
    item_name: str = Field(max_length=100)
    quantity: int
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)


class PaymentTransaction(SQLModel, table=True):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint(_one_of("transaction_type", TransactionType), name="ck_transactions_type"),
        CheckConstraint(
            "(transaction_type = 'DineIn' AND address IS NULL AND delivery_fee IS NULL AND pickup_time IS NULL)"
            " OR (transaction_type = 'Online' AND address IS NOT NULL AND delivery_fee IS NOT NULL"
            " AND pickup_time IS NULL)"
            " OR (transaction_type = 'TakeOut' AND address IS NULL AND delivery_fee IS NULL"
            " AND pickup_time IS NOT NULL)",
            name="ck_transactions_fields_match_type",
        ),
    )

    transaction_id: Optional[int] = Field(default=None, primary_key=True)
    transaction_time: datetime = Field(sa_type=DateTime(timezone=True))
    order_id: int = Field(foreign_key="orders.order_id", sa_column_kwargs={"unique": True})
    transaction_type: str = Field(max_length=20)
    address: Optional[str] = Field(default=None, max_length=255)
    delivery_fee: Optional[Decimal] = Field(default=None, max_digits=5, decimal_places=2)
    pickup_time: Optional[str] = Field(default=None, max_length=20)


# creation order; dropped in reverse
SCHEMA_MODELS = (MenuItem, DiningTable, Order, OrderLine, PaymentTransaction)


__all__ = [
    "ItemType",
    "OrderType",
    "TransactionType",
    "MenuItem",
    "DiningTable",
    "Order",
    "OrderLine",
    "PaymentTransaction",
    "SCHEMA_MODELS",
]
