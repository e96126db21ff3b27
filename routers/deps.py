# routers/deps.py
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import OperationLogger
from db.database import get_db
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository
from services.task_service import TaskService
from services.user_service import UserService


def get_logger(request: Request) -> OperationLogger:
    return request.app.state.logger


def get_task_service(
    db: AsyncSession = Depends(get_db),
    logger: OperationLogger = Depends(get_logger),
) -> TaskService:
    return TaskService(TaskRepository(db, logger), logger)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    logger: OperationLogger = Depends(get_logger),
) -> UserService:
    return UserService(UserRepository(db, logger), logger)
