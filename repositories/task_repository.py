# repositories/task_repository.py
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import OperationLogger
from models.task import Task
from repositories.base import Page, paginate
from schemas.query import ListQuery


class TaskRepository:
    def __init__(self, session: AsyncSession, logger: OperationLogger):
        self.session = session
        self.logger = logger

    async def create_task(self, data: dict) -> Task:
        self.logger.debug("Creating task in repository", operation="repository.create_task", title=data.get("title"))

        task = Task(**data)
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        return task

    async def get_task(self, task_id: UUID) -> Optional[Task]:
        self.logger.debug("Fetching task by ID in repository", operation="repository.get_task", id=str(task_id))
        return await self.session.get(Task, task_id)

    async def update_task(self, task_id: UUID, data: dict) -> Optional[Task]:
        self.logger.debug("Updating task in repository", operation="repository.update_task", id=str(task_id))

        task = await self.session.get(Task, task_id)
        if task is None:
            self.logger.debug(f"Task {task_id} not found for update")
            return None

        for field, value in data.items():
            setattr(task, field, value)

        await self.session.commit()
        await self.session.refresh(task)
        return task

    async def list_tasks(self, query: ListQuery) -> Page[Task]:
        self.logger.debug(
            "Listing tasks in repository",
            operation="repository.list_tasks",
            criteria=[asdict(c) for c in query.criteria],
            page=query.options.page,
            limit=query.options.limit,
        )
        return await paginate(self.session, Task, query, Task.task_id)

    async def find_task_by_title(self, title: str) -> Optional[Task]:
        self.logger.debug("Finding task by title in repository", operation="repository.find_task_by_title", title=title)
        return await self.session.scalar(select(Task).where(Task.title == title).limit(1))

    async def find_tasks_by_status(self, status: str) -> List[Task]:
        self.logger.debug("Finding tasks by status in repository", operation="repository.find_tasks_by_status", status=status)
        rows = await self.session.scalars(
            select(Task).where(Task.status == status).order_by(Task.created_at.desc(), Task.task_id)
        )
        return list(rows)

    async def find_tasks_by_due_date(self, start: datetime, end: datetime) -> List[Task]:
        """Tasks due in [start, end)"""
        self.logger.debug(
            "Finding tasks by due date in repository",
            operation="repository.find_tasks_by_due_date",
            start=start,
            end=end,
        )
        rows = await self.session.scalars(
            select(Task)
            .where(Task.due_date >= start, Task.due_date < end)
            .order_by(Task.due_date, Task.task_id)
        )
        return list(rows)

    async def delete_task(self, task_id: UUID) -> Optional[Task]:
        self.logger.debug("Deleting task in repository", operation="repository.delete_task", id=str(task_id))

        task = await self.session.get(Task, task_id)
        if task is None:
            self.logger.debug(f"Task {task_id} not found for deletion")
            return None

        await self.session.delete(task)
        await self.session.commit()
        return task
