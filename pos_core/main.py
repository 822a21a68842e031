import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status

from . import schemas
from .config import Settings, get_settings
from .crud import OrderWriter, TransactionRecorder
from .database import build_engine, init_db
from .exceptions import ConnectivityError, OrderPersistenceError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Restaurant POS Orders", version="0.1.0")
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.order_writer = OrderWriter(engine)
    app.state.transaction_recorder = TransactionRecorder(engine)

    @app.on_event("startup")
    def on_startup() -> None:
        if settings.reset_database_on_startup:
            # errors propagate and abort startup
            init_db(engine)
        else:
            logger.info("Skipping database reset; schema is expected to exist")

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        engine.dispose()

    def verify_access_key(
        x_access_key: Annotated[str | None, Header(alias="X-Access-Key")] = None
    ) -> None:
        if settings.access_key and x_access_key != settings.access_key:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid access key",
            )

    AccessGuard = Annotated[None, Depends(verify_access_key)]

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "ok"}

    @app.post("/orders", response_model=schemas.OrderCreated, status_code=status.HTTP_201_CREATED)
    def create_order(
        payload: schemas.OrderInput,
        request: Request,
        _: AccessGuard,
    ):
        writer: OrderWriter = request.app.state.order_writer
        try:
            order_id = writer.save_order(payload)
        except ConnectivityError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        except OrderPersistenceError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return schemas.OrderCreated(order_id=order_id, total=payload.total)

    @app.post(
        "/transactions",
        response_model=schemas.TransactionCreated,
        status_code=status.HTTP_201_CREATED,
    )
    def create_transaction(
        payload: schemas.TransactionInput,
        request: Request,
        _: AccessGuard,
    ):
        recorder: TransactionRecorder = request.app.state.transaction_recorder
        try:
            transaction_id = recorder.record_transaction(payload)
        except ConnectivityError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        except OrderPersistenceError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
        return schemas.TransactionCreated(transaction_id=transaction_id)

    return app
