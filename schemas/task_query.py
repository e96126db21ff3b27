# schemas/task_query.py
from typing import Any, Literal, Mapping, Optional
from uuid import UUID

from pydantic import Field

from schemas.query import ListParams, ListQuery, QueryFields, build_query
from schemas.task import TaskStatus
from schemas.validation import Timestamp


class TaskQueryParams(ListParams):
    # partial, case-insensitive
    title: Optional[str] = Field(None, alias="titulo")
    description: Optional[str] = Field(None, alias="descricao")

    status: Optional[TaskStatus] = None
    user_id: Optional[UUID] = Field(None, alias="usuario")

    due_date_from: Optional[Timestamp] = Field(None, alias="dataLimiteInicio")
    due_date_to: Optional[Timestamp] = Field(None, alias="dataLimiteFim")
    created_from: Optional[Timestamp] = Field(None, alias="dataCriacaoInicio")
    created_to: Optional[Timestamp] = Field(None, alias="dataCriacaoFim")
    completed_from: Optional[Timestamp] = Field(None, alias="dataConclusaoInicio")
    completed_to: Optional[Timestamp] = Field(None, alias="dataConclusaoFim")
    has_completion: Optional[bool] = Field(None, alias="comDataConclusao")

    sort_by: Literal[
        "titulo", "status", "dataLimite", "dataConclusao", "data_criacao", "data_ultima_atualizacao"
    ] = Field("data_criacao", alias="sortBy")


TASK_QUERY_FIELDS = QueryFields(
    text={"title": "title", "description": "description"},
    exact={"status": "status", "user_id": "user_id"},
    presence={"has_completion": "completed_at"},
    ranges=(
        ("due_date_from", "due_date_to", "due_date"),
        ("created_from", "created_to", "created_at"),
        ("completed_from", "completed_to", "completed_at"),
    ),
    sort={
        "titulo": "title",
        "status": "status",
        "dataLimite": "due_date",
        "dataConclusao": "completed_at",
        "data_criacao": "created_at",
        "data_ultima_atualizacao": "updated_at",
    },
)


def build_task_query(raw: Mapping[str, Any]) -> ListQuery:
    return build_query(TaskQueryParams, raw, TASK_QUERY_FIELDS)
