# schemas/task.py
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError
from datetime import date, datetime
from typing import Annotated, Optional
from uuid import UUID
from enum import Enum

from core.timeutils import utcnow
from schemas.page import PageResponse
from schemas.validation import Timestamp


class TaskStatus(str, Enum):
    """Task lifecycle states; values are the labels used on the wire"""
    PENDING = "Pendente"
    IN_PROGRESS = "Em Progresso"
    COMPLETED = "Concluída"
    ABANDONED = "Abandonada"
    OVERDUE = "Atrasada"


Title = Annotated[str, StringConstraints(min_length=3, max_length=100)]
Description = Annotated[str, StringConstraints(max_length=500)]


class TaskCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Title = Field(alias="titulo")
    description: Optional[Description] = Field(None, alias="descricao")
    status: TaskStatus
    due_date: Timestamp = Field(alias="dataLimite")
    completed_at: Optional[Timestamp] = Field(None, alias="dataConclusao")
    user_id: UUID = Field(alias="usuario")

    @field_validator("due_date")
    @classmethod
    def _due_date_in_future(cls, value: datetime) -> datetime:
        if value <= utcnow():
            raise PydanticCustomError("future_date", "Due date must be a future date")
        return value


class TaskUpdate(BaseModel):
    # due date is not re-checked against "now" here
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[Title] = Field(None, alias="titulo")
    description: Optional[Description] = Field(None, alias="descricao")
    status: Optional[TaskStatus] = None
    due_date: Optional[Timestamp] = Field(None, alias="dataLimite")
    completed_at: Optional[Timestamp] = Field(None, alias="dataConclusao")
    user_id: Optional[UUID] = Field(None, alias="usuario")

    @field_validator("title", "status", "due_date", "user_id")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise PydanticCustomError("not_null", "Field cannot be null")
        return value


class DueDateLookup(BaseModel):
    due_date: date = Field(alias="dataLimite")


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    task_id: UUID = Field(alias="id")
    title: str = Field(alias="titulo")
    description: Optional[str] = Field(None, alias="descricao")
    status: str
    due_date: datetime = Field(alias="dataLimite")
    completed_at: Optional[datetime] = Field(None, alias="dataConclusao")
    user_id: UUID = Field(alias="usuario")
    created_at: datetime = Field(alias="data_criacao")
    updated_at: datetime = Field(alias="data_ultima_atualizacao")


class TaskEnvelope(BaseModel):
    message: str
    tarefa: TaskResponse


class TaskPageEnvelope(BaseModel):
    tarefas: PageResponse[TaskResponse]


