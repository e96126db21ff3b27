# schemas/query.py
"""
List-query parameters -> storage filter + pagination/sort options.

The builder never touches the database: it validates the raw query string,
runs the cross-field range checks and emits plain ``Criterion`` values that
the repositories translate into SQL. Equal parameters always produce equal
``ListQuery`` objects.
"""
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.errors import FieldError, ValidationError
from schemas.validation import validate

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

# operators
CONTAINS = "contains"
EQUALS = "eq"
GTE = "gte"
LTE = "lte"
IS_NULL = "is_null"
NOT_NULL = "not_null"


@dataclass(frozen=True)
class Criterion:
    column: str
    op: str
    value: Any = None


@dataclass(frozen=True)
class PageOptions:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = "created_at"
    descending: bool = True


@dataclass(frozen=True)
class ListQuery:
    criteria: tuple = ()
    options: PageOptions = PageOptions()


@dataclass(frozen=True)
class QueryFields:
    """
    Maps validated parameter names onto stored columns.

    ranges: (start param, end param, column) triples, inclusive on both ends
    presence: boolean params meaning "column is set" / "column is empty"
    sort: allowed wire sort keys -> column
    """
    sort: Mapping[str, str]
    text: Mapping[str, str] = field(default_factory=dict)
    exact: Mapping[str, str] = field(default_factory=dict)
    ranges: tuple = ()
    presence: Mapping[str, str] = field(default_factory=dict)


class ListParams(BaseModel):
    """Pagination and ordering shared by every list endpoint"""

    model_config = ConfigDict(use_enum_values=True)

    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    sort_order: Literal["asc", "desc"] = Field("desc", alias="sortOrder")

    @field_validator("limit")
    @classmethod
    def _cap_limit(cls, value: int) -> int:
        return min(value, MAX_PAGE_SIZE)


def _wire_name(schema: Type[BaseModel], name: str) -> str:
    return schema.model_fields[name].alias or name


def check_ranges(params: BaseModel, fields: QueryFields) -> list[FieldError]:
    """Second pass, after per-field validation: start of a range must not be after its end."""
    schema = type(params)
    errors = []
    for start, end, _ in fields.ranges:
        lower, upper = getattr(params, start), getattr(params, end)
        if lower is not None and upper is not None and lower > upper:
            start_name, end_name = _wire_name(schema, start), _wire_name(schema, end)
            errors.append(FieldError(field=start_name, message=f"{start_name} cannot be later than {end_name}"))
    return errors


def build_query(schema: Type[ListParams], raw: Mapping[str, Any], fields: QueryFields) -> ListQuery:
    params = validate(schema, dict(raw), "Invalid query parameters")

    errors = check_ranges(params, fields)
    if errors:
        raise ValidationError("Invalid query parameters", fields=errors)

    criteria = []
    for name, column in fields.text.items():
        value = getattr(params, name)
        if value:
            criteria.append(Criterion(column, CONTAINS, value))

    for name, column in fields.exact.items():
        value = getattr(params, name)
        if value is not None:
            criteria.append(Criterion(column, EQUALS, value))

    for name, column in fields.presence.items():
        value = getattr(params, name)
        if value is not None:
            criteria.append(Criterion(column, NOT_NULL if value else IS_NULL))

    for start, end, column in fields.ranges:
        lower, upper = getattr(params, start), getattr(params, end)
        if lower is not None:
            criteria.append(Criterion(column, GTE, lower))
        if upper is not None:
            criteria.append(Criterion(column, LTE, upper))

    options = PageOptions(
        page=params.page,
        limit=params.limit,
        sort_by=fields.sort[params.sort_by],
        descending=params.sort_order == "desc",
    )
    return ListQuery(criteria=tuple(criteria), options=options)
