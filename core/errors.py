# core/errors.py
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class AppError(Exception):
    """Base for every error the API knows how to turn into a response."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        return {"message": self.message, "details": self.details}


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str, fields: Iterable[FieldError] = (), details: Any = None):
        self.fields = list(fields)
        if details is None:
            details = [asdict(f) for f in self.fields]
        super().__init__(message, details)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, entity: str, key: Any, message: Optional[str] = None, details: Any = None):
        self.entity = entity
        self.key = key
        super().__init__(message or f"{entity} with ID '{key}' not found", details)


class DatabaseError(AppError):
    status_code = 500

    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        # driver message only: the SQLAlchemy wrapper text carries the statement
        super().__init__(message, str(getattr(cause, "orig", None) or cause))


INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(error: BaseException) -> tuple[int, dict]:
    """
    Single translation point from an exception to (status, body)
    """
    if isinstance(error, AppError):
        return error.status_code, error.to_payload()
    return 500, {"message": INTERNAL_ERROR_MESSAGE}
