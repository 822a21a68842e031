from datetime import date, datetime, timezone
from decimal import Decimal

DEFAULT_MENU_ITEMS = [
    {"item_id": 1, "name": "Cheeseburger", "price": Decimal("9.99"), "inventory": 50, "item_type": "Regular",
     "is_alcoholic": None, "season": None, "valid_until": None},
    {"item_id": 2, "name": "Fries", "price": Decimal("3.49"), "inventory": 100, "item_type": "Regular",
     "is_alcoholic": None, "season": None, "valid_until": None},
    {"item_id": 3, "name": "Soda", "price": Decimal("1.99"), "inventory": 200, "item_type": "Beverage",
     "is_alcoholic": False, "season": None, "valid_until": None},
    {"item_id": 4, "name": "Craft Beer", "price": Decimal("6.50"), "inventory": 75, "item_type": "Beverage",
     "is_alcoholic": True, "season": None, "valid_until": None},
    {"item_id": 5, "name": "Pumpkin Spice Latte", "price": Decimal("5.50"), "inventory": 40, "item_type": "Seasonal",
     "is_alcoholic": False, "season": "Fall", "valid_until": date(2023, 11, 30)},
    {"item_id": 6, "name": "Caesar Salad", "price": Decimal("8.50"), "inventory": 30, "item_type": "Regular",
     "is_alcoholic": None, "season": None, "valid_until": None},
    {"item_id": 7, "name": "Iced Tea", "price": Decimal("2.29"), "inventory": 150, "item_type": "Beverage",
     "is_alcoholic": False, "season": None, "valid_until": None},
    {"item_id": 8, "name": "Winter Stew", "price": Decimal("12.95"), "inventory": 25, "item_type": "Seasonal",
     "is_alcoholic": None, "season": "Winter", "valid_until": date(2024, 3, 15)},
]

DEFAULT_TABLES = [
    {"table_id": 1, "seats": 4, "is_reserved": True},
    {"table_id": 2, "seats": 2, "is_reserved": False},
    {"table_id": 3, "seats": 6, "is_reserved": True},
    {"table_id": 4, "seats": 4, "is_reserved": True},
]

DEFAULT_ORDERS = [
    {"order_id": 101, "order_type": "DineIn", "table_id": 1, "is_served": True},
    {"order_id": 102, "order_type": "TakeOut", "table_id": None, "is_served": True},
    {"order_id": 103, "order_type": "Online", "table_id": None, "is_served": True},
    {"order_id": 104, "order_type": "DineIn", "table_id": 3, "is_served": True},
    {"order_id": 105, "order_type": "Online", "table_id": None, "is_served": False},
    {"order_id": 106, "order_type": "DineIn", "table_id": 4, "is_served": False},
]

# (order_id, item_id, quantity); name and unit price come from the menu
DEFAULT_ORDER_LINES = [
    (101, 1, 1), (101, 2, 1), (101, 4, 1),
    (102, 6, 1), (102, 7, 1),
    (103, 1, 2), (103, 3, 2),
    (104, 8, 1), (104, 3, 1),
    (105, 5, 1),
    (106, 1, 1), (106, 7, 1),
]

DEFAULT_TRANSACTIONS = [
    {"transaction_id": 1001, "transaction_time": datetime(2023, 10, 27, 12, 15, 0, tzinfo=timezone.utc), "order_id": 101,
     "transaction_type": "DineIn", "address": None, "delivery_fee": None, "pickup_time": None},
    {"transaction_id": 1002, "transaction_time": datetime(2023, 10, 27, 12, 35, 10, tzinfo=timezone.utc), "order_id": 102,
     "transaction_type": "TakeOut", "address": None, "delivery_fee": None, "pickup_time": "12:50 PM"},
    {"transaction_id": 1003, "transaction_time": datetime(2023, 10, 27, 13, 5, 0, tzinfo=timezone.utc), "order_id": 103,
     "transaction_type": "Online", "address": "123 Main St, Anytown", "delivery_fee": Decimal("3.99"),
     "pickup_time": None},
]


def default_order_lines() -> list[dict]:
    menu = {item["item_id"]: item for item in DEFAULT_MENU_ITEMS}
    return [
        {
            "order_id": order_id,
            "item_id": item_id,
            "item_name": menu[item_id]["name"],
            "quantity": quantity,
            "unit_price": menu[item_id]["price"],
        }
        for order_id, item_id, quantity in DEFAULT_ORDER_LINES
    ]
