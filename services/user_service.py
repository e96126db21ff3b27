# services/user_service.py
from typing import Any, Mapping

from core.errors import NotFoundError
from core.logger import OperationLogger
from core.security import hash_secrets
from models.user import User
from repositories.base import Page
from repositories.user_repository import UserRepository
from schemas.user import UserCreate, UserUpdate
from schemas.user_query import build_user_query
from schemas.validation import parse_identifier, validate
from services.errors import storage_errors

VALIDATION_MESSAGE = "Validation error in user data"


class UserService:
    def __init__(self, repository: UserRepository, logger: OperationLogger):
        self.repository = repository
        self.logger = logger

    async def create_user(self, payload: Any) -> User:
        """
        Validate, hash the secret fields and insert.
        Duplicate nickname / email are rejected by the storage layer (DatabaseError).
        """
        operation_id = self.logger.start("create_user", "Creating user", data=payload)

        with storage_errors(self.logger, operation_id, "create_user", "Error creating user"):
            data = validate(UserCreate, payload, VALIDATION_MESSAGE)
            self.logger.debug(f"[{operation_id}] User data validated")
            user = await self.repository.create_user(await hash_secrets(data.model_dump()))

        self.logger.finish(operation_id, "create_user", "User created", id=str(user.user_id), name=user.name)
        return user

    async def update_user(self, user_id: str, payload: Any) -> User:
        operation_id = self.logger.start("update_user", "Updating user", id=user_id, data=payload)

        with storage_errors(self.logger, operation_id, "update_user", "Error updating user"):
            identifier = parse_identifier(user_id)
            data = validate(UserUpdate, payload, VALIDATION_MESSAGE)
            self.logger.debug(f"[{operation_id}] User data validated")
            user = await self.repository.update_user(
                identifier, await hash_secrets(data.model_dump(exclude_unset=True))
            )
            if user is None:
                raise NotFoundError("User", user_id, details="The user you are trying to update does not exist.")

        self.logger.finish(
            operation_id, "update_user", "User updated", id=str(user.user_id), name=user.name, email=user.email
        )
        return user

    async def get_user(self, user_id: str) -> User:
        operation_id = self.logger.start("get_user", "Fetching user", id=user_id)

        with storage_errors(self.logger, operation_id, "get_user", "Error fetching user"):
            identifier = parse_identifier(user_id)
            user = await self.repository.get_user(identifier)
            if user is None:
                raise NotFoundError("User", user_id, details="The user you are looking for does not exist.")

        self.logger.finish(operation_id, "get_user", "User fetched", id=user_id)
        return user

    async def list_users(self, params: Mapping[str, Any]) -> Page[User]:
        operation_id = self.logger.start("list_users", "Listing users", params=dict(params))

        with storage_errors(self.logger, operation_id, "list_users", "Error listing users"):
            query = build_user_query(params)
            page = await self.repository.list_users(query)

        self.logger.finish(operation_id, "list_users", "Users listed", total=page.total_docs, page=page.page)
        return page

    async def delete_user(self, user_id: str) -> User:
        """Deleting a user also deletes the tasks it owns."""
        operation_id = self.logger.start("delete_user", "Deleting user", id=user_id)

        with storage_errors(self.logger, operation_id, "delete_user", "Error deleting user"):
            identifier = parse_identifier(user_id)
            user = await self.repository.delete_user(identifier)
            if user is None:
                raise NotFoundError("User", user_id, details="The user you are trying to delete does not exist.")

        self.logger.finish(operation_id, "delete_user", "User deleted", id=user_id, name=user.name)
        return user
