from __future__ import annotations

import logging

from sqlalchemy import event, insert, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import create_engine

from . import seed_data
from .config import Settings
from .exceptions import ConnectivityError, SchemaInitializationError
from .models import SCHEMA_MODELS, DiningTable, MenuItem, Order, OrderLine, PaymentTransaction

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    url = settings.sqlalchemy_url()
    engine_kwargs = {}
    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_engine(url, echo=settings.echo_sql, **engine_kwargs)

    if url.get_backend_name() == "sqlite":
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class SchemaLifecycleManager:
    """Drops, recreates and seeds the order schema.

    Meant to run once at process start, before any writer touches the
    database. Every existing row is destroyed, so this is a development
    seeding step rather than a migration.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def initialize(self) -> None:
        logger.info(
            "Initializing database at %s",
            self.engine.url.render_as_string(hide_password=True),
        )
        try:
            connection = self.engine.connect()
        except SQLAlchemyError as exc:
            logger.error("FATAL: could not connect to initialize database: %s", exc)
            raise ConnectivityError("could not open connection", operation="initialize", cause=exc) from exc

        with connection:
            try:
                with connection.begin():
                    self._drop_all(connection)
                    self._create_all(connection)
                    self._seed(connection)
            except SQLAlchemyError as exc:
                logger.error("FATAL: database error during initialization: %s", exc)
                raise SchemaInitializationError(
                    "schema initialization aborted", operation="initialize", cause=exc
                ) from exc

        logger.info("Database initialized")

    def _drop_all(self, connection: Connection) -> None:
        self._set_foreign_key_checks(connection, enabled=False)
        try:
            for model in reversed(SCHEMA_MODELS):
                model.__table__.drop(connection, checkfirst=True)
        finally:
            # the connection returns to the pool; it must never keep checks off
            self._set_foreign_key_checks(connection, enabled=True)

    def _create_all(self, connection: Connection) -> None:
        for model in SCHEMA_MODELS:
            model.__table__.create(connection)

    def _seed(self, connection: Connection) -> None:
        connection.execute(insert(MenuItem.__table__), seed_data.DEFAULT_MENU_ITEMS)
        connection.execute(insert(DiningTable.__table__), seed_data.DEFAULT_TABLES)
        connection.execute(insert(Order.__table__), seed_data.DEFAULT_ORDERS)
        connection.execute(insert(OrderLine.__table__), seed_data.default_order_lines())
        connection.execute(insert(PaymentTransaction.__table__), seed_data.DEFAULT_TRANSACTIONS)
        if connection.dialect.name == "postgresql":
            self._resync_sequences(connection)
        logger.debug(
            "Seeded %d menu items, %d tables and %d orders",
            len(seed_data.DEFAULT_MENU_ITEMS),
            len(seed_data.DEFAULT_TABLES),
            len(seed_data.DEFAULT_ORDERS),
        )

    @staticmethod
    def _set_foreign_key_checks(connection: Connection, *, enabled: bool) -> None:
        dialect = connection.dialect.name
        if dialect == "mysql":
            connection.execute(text(f"SET FOREIGN_KEY_CHECKS={int(enabled)}"))
        elif dialect == "sqlite":
            connection.execute(text(f"PRAGMA foreign_keys={'ON' if enabled else 'OFF'}"))

    @staticmethod
    def _resync_sequences(connection: Connection) -> None:
        # seeded rows carry explicit ids, so move the serial sequences past them
        for table, column in (("orders", "order_id"), ("transactions", "transaction_id")):
            connection.execute(
                text(
                    f"SELECT setval(pg_get_serial_sequence('{table}', '{column}'), "
                    f"(SELECT MAX({column}) FROM {table}))"
                )
            )


def init_db(engine: Engine) -> None:
    SchemaLifecycleManager(engine).initialize()
