from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlmodel import Session

from pos_core.exceptions import OrderPersistenceError
from pos_core.models import PaymentTransaction, TransactionType
from pos_core.schemas import TransactionInput


def test_record_online_transaction(recorder, seeded_engine):
    payment = TransactionInput(
        order_id=105,
        transaction_type="Online",
        transaction_time=datetime(2024, 5, 1, 12, 0),
        address="9 Elm St",
        delivery_fee="4.50",
    )
    transaction_id = recorder.record_transaction(payment)

    with Session(seeded_engine) as session:
        stored = session.get(PaymentTransaction, transaction_id)
    assert stored.order_id == 105
    assert stored.transaction_type == "Online"
    assert stored.delivery_fee == Decimal("4.50")
    assert stored.pickup_time is None


def test_record_dine_in_transaction_defaults_time(recorder):
    transaction_id = recorder.record_transaction(
        TransactionInput(order_id=104, transaction_type=TransactionType.DINE_IN)
    )
    assert transaction_id > 1003


def test_second_transaction_for_order_is_rejected(recorder):
    with pytest.raises(OrderPersistenceError) as excinfo:
        recorder.record_transaction(TransactionInput(order_id=101, transaction_type="DineIn"))
    assert excinfo.value.operation == "record_transaction"


def test_transaction_for_missing_order_is_rejected(recorder):
    with pytest.raises(OrderPersistenceError):
        recorder.record_transaction(
            TransactionInput(order_id=999, transaction_type="TakeOut", pickup_time="6:15 PM")
        )


@pytest.mark.parametrize(
    "fields",
    [
        {"transaction_type": "Online", "delivery_fee": "2.00"},
        {"transaction_type": "Online", "address": "1 Side St"},
        {"transaction_type": "Online", "address": "1 Side St", "delivery_fee": "2.00", "pickup_time": "6 PM"},
        {"transaction_type": "DineIn", "pickup_time": "7:00 PM"},
        {"transaction_type": "DineIn", "delivery_fee": "1.00"},
        {"transaction_type": "TakeOut"},
        {"transaction_type": "TakeOut", "pickup_time": "7:00 PM", "address": "1 Side St"},
    ],
)
def test_fields_must_match_transaction_type(fields):
    with pytest.raises(ValidationError):
        TransactionInput(order_id=104, **fields)


def test_transaction_time_is_normalized_to_utc():
    local = datetime(2024, 5, 1, 9, 0, tzinfo=timezone(timedelta(hours=-5)))
    payment = TransactionInput(order_id=104, transaction_type="DineIn", transaction_time=local)
    assert payment.transaction_time == datetime(2024, 5, 1, 14, 0, tzinfo=timezone.utc)
    assert payment.transaction_time.tzinfo is timezone.utc
