# repositories/user_repository.py
from dataclasses import asdict
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import OperationLogger
from models.task import Task
from models.user import User
from repositories.base import Page, paginate
from schemas.query import ListQuery


class UserRepository:
    def __init__(self, session: AsyncSession, logger: OperationLogger):
        self.session = session
        self.logger = logger

    async def create_user(self, data: dict) -> User:
        self.logger.debug("Creating user in repository", operation="repository.create_user", email=data.get("email"))

        user = User(**data)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_user(self, user_id: UUID) -> Optional[User]:
        self.logger.debug("Fetching user by ID in repository", operation="repository.get_user", id=str(user_id))
        return await self.session.get(User, user_id)

    async def update_user(self, user_id: UUID, data: dict) -> Optional[User]:
        self.logger.debug("Updating user in repository", operation="repository.update_user", id=str(user_id))

        user = await self.session.get(User, user_id)
        if user is None:
            self.logger.debug(f"User {user_id} not found for update")
            return None

        for field, value in data.items():
            setattr(user, field, value)

        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def list_users(self, query: ListQuery) -> Page[User]:
        self.logger.debug(
            "Listing users in repository",
            operation="repository.list_users",
            criteria=[asdict(c) for c in query.criteria],
            page=query.options.page,
            limit=query.options.limit,
        )
        return await paginate(self.session, User, query, User.user_id)

    async def delete_user(self, user_id: UUID) -> Optional[User]:
        """Deletes the user together with every task it owns."""
        self.logger.debug("Deleting user in repository", operation="repository.delete_user", id=str(user_id))

        user = await self.session.get(User, user_id)
        if user is None:
            self.logger.debug(f"User {user_id} not found for deletion")
            return None

        await self.session.execute(delete(Task).where(Task.user_id == user_id))
        await self.session.delete(user)
        await self.session.commit()
        self.logger.debug(f"User {user_id} deleted")
        return user
