from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .exceptions import ConnectivityError, OrderPersistenceError
from .models import MenuItem, Order, OrderLine, PaymentTransaction
from .schemas import OrderInput, SaveOutcome, TransactionInput

logger = logging.getLogger(__name__)


def _open_session(engine: Engine, operation: str) -> Session:
    session = Session(engine)
    try:
        # checks out the connection and begins the transaction
        session.connection()
    except SQLAlchemyError as exc:
        session.close()
        logger.error("Could not connect for %s: %s", operation, exc)
        raise ConnectivityError("could not open connection", operation=operation, cause=exc) from exc
    return session


# -------------------------
# Order operations
# -------------------------

class OrderWriter:
    """Persists an order header and its lines as one all-or-nothing unit."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def save_order(self, order: OrderInput) -> int:
        with _open_session(self.engine, "save_order") as session:
            try:
                order_id = self._insert_order(session, order)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.warning("Rolled back order for %s: %s", order.customer_name, exc)
                raise OrderPersistenceError(
                    "order was not saved", operation="save_order", cause=exc
                ) from exc
            except OrderPersistenceError:
                session.rollback()
                raise
        logger.info("Saved order %s with %d line(s)", order_id, len(order.items))
        return order_id

    def place_order(self, order: OrderInput) -> SaveOutcome:
        try:
            order_id = self.save_order(order)
        except (OrderPersistenceError, ConnectivityError) as exc:
            return SaveOutcome(ok=False, error=str(exc))
        return SaveOutcome(ok=True, order_id=order_id)

    def _insert_order(self, session: Session, order: OrderInput) -> int:
        header = Order(
            order_type=order.order_type.value,
            table_id=order.table_id,
            customer_name=order.customer_name,
            order_time=order.order_time,
        )
        session.add(header)
        session.flush()
        order_id = header.order_id

        connection = session.connection()
        for line in order.items:
            item_id = session.exec(
                select(MenuItem.item_id).where(MenuItem.name == line.name)
            ).first()
            if item_id is None:
                raise OrderPersistenceError(
                    f"unknown menu item {line.name!r}", operation="save_order"
                )
            # core insert so a repeated item fails as a key violation in the database
            connection.execute(
                insert(OrderLine.__table__).values(
                    order_id=order_id,
                    item_id=item_id,
                    item_name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
            )
        return order_id


def get_order(session: Session, order_id: int) -> Order | None:
    return session.get(Order, order_id)


def list_order_lines(session: Session, order_id: int) -> list[OrderLine]:
    statement = select(OrderLine).where(OrderLine.order_id == order_id)
    return list(session.exec(statement))


# -------------------------
# Transaction operations
# -------------------------

class TransactionRecorder:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def record_transaction(self, payment: TransactionInput) -> int:
        with _open_session(self.engine, "record_transaction") as session:
            record = PaymentTransaction(
                transaction_time=payment.transaction_time or datetime.now(timezone.utc),
                order_id=payment.order_id,
                transaction_type=payment.transaction_type.value,
                address=payment.address,
                delivery_fee=payment.delivery_fee,
                pickup_time=payment.pickup_time,
            )
            try:
                session.add(record)
                session.commit()
                session.refresh(record)
                transaction_id = record.transaction_id
            except SQLAlchemyError as exc:
                session.rollback()
                logger.warning("Rolled back transaction for order %s: %s", payment.order_id, exc)
                raise OrderPersistenceError(
                    "transaction was not recorded", operation="record_transaction", cause=exc
                ) from exc
        logger.info("Recorded transaction %s for order %s", transaction_id, payment.order_id)
        return transaction_id
