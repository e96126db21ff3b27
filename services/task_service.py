# services/task_service.py
from datetime import datetime, time, timedelta
from typing import Any, List, Mapping

from core.errors import NotFoundError
from core.logger import OperationLogger
from models.task import Task
from repositories.base import Page
from repositories.task_repository import TaskRepository
from schemas.task import DueDateLookup, TaskCreate, TaskUpdate
from schemas.task_query import build_task_query
from schemas.validation import parse_identifier, validate
from services.errors import storage_errors

VALIDATION_MESSAGE = "Validation error in task data"


class TaskService:
    """
    Validation and error normalization around TaskRepository.

    Every public method:
    - logs start/finish under a fresh operation id
    - raises ValidationError before any storage call when input is malformed
    - raises NotFoundError when the repository reports nothing
    - raises DatabaseError for storage failures
    """

    def __init__(self, repository: TaskRepository, logger: OperationLogger):
        self.repository = repository
        self.logger = logger

    async def create_task(self, payload: Any) -> Task:
        operation_id = self.logger.start("create_task", "Creating task", data=payload)

        with storage_errors(self.logger, operation_id, "create_task", "Error creating task"):
            data = validate(TaskCreate, payload, VALIDATION_MESSAGE)
            task = await self.repository.create_task(data.model_dump())

        self.logger.finish(operation_id, "create_task", "Task created", id=str(task.task_id), title=task.title)
        return task

    async def update_task(self, task_id: str, payload: Any) -> Task:
        operation_id = self.logger.start("update_task", "Updating task", id=task_id, data=payload)

        with storage_errors(self.logger, operation_id, "update_task", "Error updating task"):
            identifier = parse_identifier(task_id)
            data = validate(TaskUpdate, payload, VALIDATION_MESSAGE)
            task = await self.repository.update_task(identifier, data.model_dump(exclude_unset=True))
            if task is None:
                raise NotFoundError("Task", task_id, details="The task you are trying to update does not exist.")

        self.logger.finish(operation_id, "update_task", "Task updated", id=task_id)
        return task

    async def get_task(self, task_id: str) -> Task:
        operation_id = self.logger.start("get_task", "Fetching task", id=task_id)

        with storage_errors(self.logger, operation_id, "get_task", "Error fetching task"):
            identifier = parse_identifier(task_id)
            task = await self.repository.get_task(identifier)
            if task is None:
                raise NotFoundError("Task", task_id, details="The task you are looking for does not exist.")

        self.logger.finish(operation_id, "get_task", "Task fetched", id=task_id)
        return task

    async def list_tasks(self, params: Mapping[str, Any]) -> Page[Task]:
        operation_id = self.logger.start("list_tasks", "Listing tasks", params=dict(params))

        with storage_errors(self.logger, operation_id, "list_tasks", "Error listing tasks"):
            query = build_task_query(params)
            page = await self.repository.list_tasks(query)

        self.logger.finish(
            operation_id, "list_tasks", "Tasks listed", total=page.total_docs, page=page.page, limit=page.limit
        )
        return page

    async def find_task_by_title(self, title: str) -> Task:
        operation_id = self.logger.start("find_task_by_title", "Finding task by title", title=title)

        with storage_errors(self.logger, operation_id, "find_task_by_title", "Error finding task by title"):
            task = await self.repository.find_task_by_title(title)
            if task is None:
                raise NotFoundError(
                    "Task",
                    title,
                    message=f"Task with title '{title}' not found",
                    details="The search completed, but no task matches the given title.",
                )

        self.logger.finish(operation_id, "find_task_by_title", "Task found", id=str(task.task_id))
        return task

    async def find_tasks_by_status(self, status: str) -> List[Task]:
        operation_id = self.logger.start("find_tasks_by_status", "Finding tasks by status", status=status)

        with storage_errors(self.logger, operation_id, "find_tasks_by_status", "Error finding tasks by status"):
            tasks = await self.repository.find_tasks_by_status(status)
            if not tasks:
                raise NotFoundError(
                    "Task",
                    status,
                    message=f"No task found with status '{status}'",
                    details="The search completed, but no task matches the given status.",
                )

        self.logger.finish(operation_id, "find_tasks_by_status", "Tasks found", count=len(tasks))
        return tasks

    async def find_tasks_by_due_date(self, due_date: str) -> List[Task]:
        """Tasks due on the given calendar day (UTC)."""
        operation_id = self.logger.start("find_tasks_by_due_date", "Finding tasks by due date", due_date=due_date)

        with storage_errors(self.logger, operation_id, "find_tasks_by_due_date", "Error finding tasks by due date"):
            day = validate(DueDateLookup, {"dataLimite": due_date}, "Invalid due date").due_date
            start = datetime.combine(day, time.min)
            tasks = await self.repository.find_tasks_by_due_date(start, start + timedelta(days=1))
            if not tasks:
                raise NotFoundError(
                    "Task",
                    due_date,
                    message=f"No task found with due date '{due_date}'",
                    details="The search completed, but no task matches the given due date.",
                )

        self.logger.finish(operation_id, "find_tasks_by_due_date", "Tasks found", count=len(tasks))
        return tasks

    async def delete_task(self, task_id: str) -> Task:
        operation_id = self.logger.start("delete_task", "Deleting task", id=task_id)

        with storage_errors(self.logger, operation_id, "delete_task", "Error deleting task"):
            identifier = parse_identifier(task_id)
            task = await self.repository.delete_task(identifier)
            if task is None:
                raise NotFoundError("Task", task_id, details="The task you are trying to delete does not exist.")

        self.logger.finish(operation_id, "delete_task", "Task deleted", id=task_id, title=task.title)
        return task
