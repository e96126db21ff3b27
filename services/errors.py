# services/errors.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from core.errors import AppError, DatabaseError
from core.logger import OperationLogger


@contextmanager
def storage_errors(logger: OperationLogger, operation_id: str, operation: str, message: str):
    """
    Errors raised inside the block leave it as typed AppErrors:
    - AppError passes through unchanged (logged as a warning)
    - SQLAlchemyError is wrapped as DatabaseError(message)
    """
    try:
        yield
    except AppError as exc:
        logger.warning(operation_id, f"{operation} rejected: {exc.message}", details=exc.details)
        raise
    except SQLAlchemyError as exc:
        logger.failure(operation_id, operation, exc)
        raise DatabaseError(message, cause=exc) from exc
