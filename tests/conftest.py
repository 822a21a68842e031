from datetime import datetime

import pytest
from sqlmodel import Session

from pos_core.config import Settings
from pos_core.crud import OrderWriter, TransactionRecorder
from pos_core.database import SchemaLifecycleManager, build_engine
from pos_core.schemas import OrderInput


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'pos.db'}",
        reset_database_on_startup=True,
        access_key=None,
        _env_file=None,
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_engine(engine):
    SchemaLifecycleManager(engine).initialize()
    return engine


@pytest.fixture
def session(seeded_engine):
    with Session(seeded_engine) as session:
        yield session


@pytest.fixture
def writer(seeded_engine):
    return OrderWriter(seeded_engine)


@pytest.fixture
def recorder(seeded_engine):
    return TransactionRecorder(seeded_engine)


@pytest.fixture
def alice_order():
    return OrderInput(
        customer_name="Alice",
        order_time=datetime(2024, 5, 1, 18, 30),
        items=[
            {"name": "Cheeseburger", "quantity": 1, "unit_price": "9.99"},
            {"name": "Fries", "quantity": 1, "unit_price": "3.49"},
        ],
    )
