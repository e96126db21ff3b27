# schemas/user.py
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError
from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID
from enum import Enum

from schemas.page import PageResponse

EMAIL_MAX_LENGTH = 50


class UserStatus(str, Enum):
    ACTIVE = "Ativo"
    INACTIVE = "Inativo"
    BANNED = "Banido"


def _email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "email_too_long",
            "Email must have at most {max_length} characters",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return value


Name = Annotated[str, StringConstraints(min_length=3, max_length=50)]
Email = Annotated[EmailStr, AfterValidator(_email_length)]
Secret = Annotated[str, StringConstraints(min_length=6, max_length=26)]
SecurityAnswer = Annotated[str, StringConstraints(max_length=100)]


class UserCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Name = Field(alias="nome")
    nickname: Name = Field(alias="apelido")
    email: Email
    password: Secret = Field(alias="senha")
    security_answer: SecurityAnswer = Field(alias="respostaSeguranca")
    status: UserStatus


class UserUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[Name] = Field(None, alias="nome")
    nickname: Optional[Name] = Field(None, alias="apelido")
    email: Optional[Email] = None
    password: Optional[Secret] = Field(None, alias="senha")
    security_answer: Optional[SecurityAnswer] = Field(None, alias="respostaSeguranca")
    status: Optional[UserStatus] = None

    @field_validator("*")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise PydanticCustomError("not_null", "Field cannot be null")
        return value


class UserResponse(BaseModel):
    """Public view of a user: secrets are never serialized"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: UUID = Field(alias="id")
    name: str = Field(alias="nome")
    nickname: str = Field(alias="apelido")
    email: str
    status: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class UserEnvelope(BaseModel):
    message: str
    usuario: UserResponse


class UserPageEnvelope(BaseModel):
    usuarios: PageResponse[UserResponse]
