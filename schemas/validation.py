# schemas/validation.py
from datetime import datetime
from typing import Annotated, Any, Type, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.errors import FieldError, ValidationError
from core.timeutils import to_naive_utc

# every timestamp is stored as naive UTC
Timestamp = Annotated[datetime, AfterValidator(to_naive_utc)]

ModelT = TypeVar("ModelT", bound=BaseModel)


def field_errors(exc: PydanticValidationError) -> list[FieldError]:
    return [
        FieldError(field=".".join(str(part) for part in err["loc"]), message=err["msg"])
        for err in exc.errors()
    ]


def validate(schema: Type[ModelT], data: Any, message: str) -> ModelT:
    """
    Validate ``data`` against ``schema``.
    Raises ValidationError with one {field, message} entry per violation.
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(message, fields=field_errors(exc)) from exc


def parse_identifier(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise ValidationError(
            "Invalid ID",
            details=f"The provided ID '{value}' is not a valid UUID.",
        ) from exc
