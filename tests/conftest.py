import logging
from datetime import timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.logger import OperationLogger
from core.timeutils import utcnow
from main import create_app
from repositories.base import Page

TEST_LOGGER = "tests.operations"


def future_iso(days: int = 7) -> str:
    return (utcnow() + timedelta(days=days)).isoformat()


def past_iso(days: int = 1) -> str:
    return (utcnow() - timedelta(days=days)).isoformat()


# -------------------------
# in-memory repositories
# -------------------------
class FakeTaskRepository:
    """Stores tasks in a dict and records every call it receives."""

    def __init__(self):
        self.tasks = {}
        self.calls = []

    def _record(self, task_id, data):
        now = utcnow()
        task = SimpleNamespace(task_id=task_id, created_at=now, updated_at=now, **data)
        self.tasks[task_id] = task
        return task

    async def create_task(self, data):
        self.calls.append(("create_task", data))
        return self._record(uuid4(), data)

    async def get_task(self, task_id):
        self.calls.append(("get_task", task_id))
        return self.tasks.get(task_id)

    async def update_task(self, task_id, data):
        self.calls.append(("update_task", task_id, data))
        task = self.tasks.get(task_id)
        if task is None:
            return None
        for field, value in data.items():
            setattr(task, field, value)
        return task

    async def list_tasks(self, query):
        self.calls.append(("list_tasks", query))
        docs = list(self.tasks.values())
        return Page(docs=docs, total_docs=len(docs), page=query.options.page, limit=query.options.limit)

    async def find_task_by_title(self, title):
        self.calls.append(("find_task_by_title", title))
        return next((t for t in self.tasks.values() if t.title == title), None)

    async def find_tasks_by_status(self, status):
        self.calls.append(("find_tasks_by_status", status))
        return [t for t in self.tasks.values() if t.status == status]

    async def find_tasks_by_due_date(self, start, end):
        self.calls.append(("find_tasks_by_due_date", start, end))
        return [t for t in self.tasks.values() if start <= t.due_date < end]

    async def delete_task(self, task_id):
        self.calls.append(("delete_task", task_id))
        return self.tasks.pop(task_id, None)


class FakeUserRepository:
    def __init__(self):
        self.users = {}
        self.calls = []

    async def create_user(self, data):
        self.calls.append(("create_user", data))
        now = utcnow()
        user = SimpleNamespace(user_id=uuid4(), created_at=now, updated_at=now, **data)
        self.users[user.user_id] = user
        return user

    async def get_user(self, user_id):
        self.calls.append(("get_user", user_id))
        return self.users.get(user_id)

    async def update_user(self, user_id, data):
        self.calls.append(("update_user", user_id, data))
        user = self.users.get(user_id)
        if user is None:
            return None
        for field, value in data.items():
            setattr(user, field, value)
        return user

    async def list_users(self, query):
        self.calls.append(("list_users", query))
        docs = list(self.users.values())
        return Page(docs=docs, total_docs=len(docs), page=query.options.page, limit=query.options.limit)

    async def delete_user(self, user_id):
        self.calls.append(("delete_user", user_id))
        return self.users.pop(user_id, None)


# -------------------------
# fixtures
# -------------------------
@pytest.fixture
def op_logger():
    return OperationLogger(logging.getLogger(TEST_LOGGER))


@pytest.fixture
def task_repository():
    return FakeTaskRepository()


@pytest.fixture
def user_repository():
    return FakeUserRepository()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="debug",
        log_dir=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def user_payload():
    return {
        "nome": "Maria Silva",
        "apelido": "maria",
        "email": "maria@example.com",
        "senha": "s3cret-pass",
        "respostaSeguranca": "Rex",
        "status": "Ativo",
    }


@pytest.fixture
def user(client, user_payload):
    response = client.post("/users", json=user_payload)
    assert response.status_code == 201, response.text
    return response.json()["usuario"]


@pytest.fixture
def task_payload(user):
    return {
        "titulo": "Buy milk",
        "descricao": "2%",
        "status": "Pendente",
        "dataLimite": future_iso(),
        "usuario": user["id"],
    }


@pytest.fixture
def task(client, task_payload):
    response = client.post("/tasks", json=task_payload)
    assert response.status_code == 201, response.text
    return response.json()["tarefa"]
