# schemas/user_query.py
from typing import Any, Literal, Mapping, Optional
from uuid import UUID

from pydantic import Field

from schemas.query import ListParams, ListQuery, QueryFields, build_query
from schemas.user import UserStatus
from schemas.validation import Timestamp


class UserQueryParams(ListParams):
    name: Optional[str] = Field(None, alias="nome")
    nickname: Optional[str] = Field(None, alias="apelido")
    email: Optional[str] = None

    status: Optional[UserStatus] = None
    user_id: Optional[UUID] = Field(None, alias="id")

    created_from: Optional[Timestamp] = Field(None, alias="dataCadastroInicio")
    created_to: Optional[Timestamp] = Field(None, alias="dataCadastroFim")
    updated_from: Optional[Timestamp] = Field(None, alias="dataAtualizacaoInicio")
    updated_to: Optional[Timestamp] = Field(None, alias="dataAtualizacaoFim")

    sort_by: Literal["nome", "apelido", "email", "createdAt", "updatedAt"] = Field("createdAt", alias="sortBy")


USER_QUERY_FIELDS = QueryFields(
    text={"name": "name", "nickname": "nickname", "email": "email"},
    exact={"status": "status", "user_id": "user_id"},
    ranges=(
        ("created_from", "created_to", "created_at"),
        ("updated_from", "updated_to", "updated_at"),
    ),
    sort={
        "nome": "name",
        "apelido": "nickname",
        "email": "email",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
)


def build_user_query(raw: Mapping[str, Any]) -> ListQuery:
    return build_query(UserQueryParams, raw, USER_QUERY_FIELDS)
