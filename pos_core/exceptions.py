from __future__ import annotations

from typing import Any


class PosCoreError(Exception):
    """Base error for storage failures surfaced by the order core.

    Carries the operation that was in progress and, when the failure came
    from the database driver, the driver's own error code and message.
    """

    def __init__(self, message: str, *, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.driver_code, self.driver_message = driver_details(cause)
        detail = f"{operation}: {message}"
        if self.driver_message:
            detail = f"{detail} (driver error {self.driver_code}: {self.driver_message})"
        super().__init__(detail)


class SchemaInitializationError(PosCoreError):
    """Dropping, creating or seeding the schema failed. Always fatal."""


class OrderPersistenceError(PosCoreError):
    """An order or transaction write failed and was rolled back."""


class ConnectivityError(PosCoreError):
    """A database connection could not be opened."""


def driver_details(cause: BaseException | None) -> tuple[Any, str | None]:
    if cause is None:
        return None, None
    # sqlalchemy wraps the DBAPI exception in .orig
    orig = getattr(cause, "orig", None) or cause
    code = getattr(orig, "sqlstate", None) or getattr(orig, "sqlite_errorcode", None)
    if code is None and orig.args and isinstance(orig.args[0], int):
        # pymysql: (errno, message)
        code = orig.args[0]
        message = orig.args[1] if len(orig.args) > 1 else str(orig)
        return code, str(message)
    return code, str(orig)


__all__ = [
    "PosCoreError",
    "SchemaInitializationError",
    "OrderPersistenceError",
    "ConnectivityError",
]
