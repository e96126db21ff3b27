import asyncio
import logging
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from core.errors import DatabaseError, NotFoundError, ValidationError
from core.timeutils import utcnow
from repositories.base import Page
from schemas.query import ListQuery
from schemas.task import TaskCreate
from schemas.validation import validate
from services.task_service import TaskService

from conftest import TEST_LOGGER, future_iso, past_iso


@pytest.fixture
def service(task_repository, op_logger):
    return TaskService(task_repository, op_logger)


def payload(**overrides):
    data = {
        "titulo": "Buy milk",
        "descricao": "2%",
        "status": "Pendente",
        "dataLimite": future_iso(),
        "usuario": str(uuid4()),
    }
    data.update(overrides)
    return data


def run(coro):
    return asyncio.run(coro)


class BrokenTaskRepository:
    """Every storage call fails the way a dropped connection does."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection unexpectedly"))

        return fail


def test_create_stores_validated_input(service, task_repository):
    raw = payload()
    task = run(service.create_task(raw))

    expected = validate(TaskCreate, raw, "invalid").model_dump()
    assert task_repository.calls == [("create_task", expected)]
    assert {field: getattr(task, field) for field in expected} == expected
    assert task.user_id == UUID(raw["usuario"])


def test_create_with_past_due_date_fails_before_storage(service, task_repository):
    with pytest.raises(ValidationError) as info:
        run(service.create_task(payload(dataLimite=past_iso())))

    assert [f.field for f in info.value.fields] == ["dataLimite"]
    assert info.value.message == "Validation error in task data"
    assert task_repository.calls == []


@pytest.mark.parametrize("bad_id", ["123", "not-a-uuid", "507f1f77bcf86cd799439011"])
def test_malformed_ids_never_reach_storage(service, task_repository, bad_id):
    with pytest.raises(ValidationError):
        run(service.update_task(bad_id, {"status": "Concluída"}))
    with pytest.raises(ValidationError):
        run(service.delete_task(bad_id))
    with pytest.raises(ValidationError):
        run(service.get_task(bad_id))

    assert task_repository.calls == []


def test_unknown_ids_are_not_found(service):
    missing = str(uuid4())

    with pytest.raises(NotFoundError) as info:
        run(service.update_task(missing, {"status": "Concluída"}))
    assert info.value.status_code == 404
    assert missing in info.value.message

    with pytest.raises(NotFoundError):
        run(service.delete_task(missing))
    with pytest.raises(NotFoundError):
        run(service.get_task(missing))


def test_update_passes_only_given_fields(service, task_repository):
    task = run(service.create_task(payload()))

    updated = run(service.update_task(str(task.task_id), {"status": "Concluída", "dataConclusao": future_iso(1)}))

    name, task_id, data = task_repository.calls[-1]
    assert (name, task_id) == ("update_task", task.task_id)
    assert set(data) == {"status", "completed_at"}
    assert updated.status == "Concluída"
    assert updated.title == "Buy milk"


def test_update_validation_errors(service, task_repository):
    task = run(service.create_task(payload()))

    with pytest.raises(ValidationError) as info:
        run(service.update_task(str(task.task_id), {"titulo": "no"}))

    assert [f.field for f in info.value.fields] == ["titulo"]
    assert task_repository.calls[-1][0] == "create_task"


def test_delete_returns_deleted_task(service, task_repository):
    task = run(service.create_task(payload()))

    deleted = run(service.delete_task(str(task.task_id)))

    assert deleted is task
    assert task_repository.tasks == {}


def test_list_builds_query_from_raw_params(service, task_repository):
    page = run(service.list_tasks({"status": "Pendente", "limit": "5"}))

    name, query = task_repository.calls[-1]
    assert name == "list_tasks"
    assert isinstance(query, ListQuery)
    assert query.options.limit == 5
    assert isinstance(page, Page)


def test_list_with_invalid_params_never_reaches_storage(service, task_repository):
    with pytest.raises(ValidationError):
        run(service.list_tasks({"limit": "-1"}))
    assert task_repository.calls == []


def test_find_by_title(service):
    task = run(service.create_task(payload()))

    assert run(service.find_task_by_title("Buy milk")) is task

    with pytest.raises(NotFoundError) as info:
        run(service.find_task_by_title("Sell milk"))
    assert info.value.message == "Task with title 'Sell milk' not found"


def test_find_by_status_empty_is_not_found(service):
    run(service.create_task(payload()))

    assert len(run(service.find_tasks_by_status("Pendente"))) == 1

    with pytest.raises(NotFoundError) as info:
        run(service.find_tasks_by_status("NotARealStatus"))
    assert info.value.message == "No task found with status 'NotARealStatus'"


def test_find_by_due_date_covers_the_whole_day(service, task_repository):
    due = (utcnow() + timedelta(days=3)).replace(hour=18, minute=30)
    run(service.create_task(payload(dataLimite=due.isoformat())))

    tasks = run(service.find_tasks_by_due_date(due.date().isoformat()))

    assert len(tasks) == 1
    _, start, end = task_repository.calls[-1]
    assert start == datetime.combine(due.date(), datetime.min.time())
    assert end - start == timedelta(days=1)


def test_find_by_due_date_rejects_bad_dates(service, task_repository):
    with pytest.raises(ValidationError) as info:
        run(service.find_tasks_by_due_date("next tuesday"))

    assert [f.field for f in info.value.fields] == ["dataLimite"]
    assert task_repository.calls == []


def test_storage_failures_become_database_errors(op_logger, caplog):
    caplog.set_level(logging.DEBUG, logger=TEST_LOGGER)
    service = TaskService(BrokenTaskRepository(), op_logger)

    with pytest.raises(DatabaseError) as info:
        run(service.create_task(payload()))
    assert info.value.message == "Error creating task"
    assert "server closed the connection unexpectedly" in info.value.details
    assert info.value.status_code == 500

    with pytest.raises(DatabaseError) as info:
        run(service.list_tasks({}))
    assert info.value.message == "Error listing tasks"

    assert any(r.levelno == logging.ERROR and "Error in create_task" in r.getMessage() for r in caplog.records)


def test_typed_errors_pass_through_unchanged(service):
    with pytest.raises(NotFoundError):
        run(service.delete_task(str(uuid4())))


def test_every_call_is_logged_with_one_operation_id(service, caplog):
    caplog.set_level(logging.INFO, logger=TEST_LOGGER)

    run(service.create_task(payload()))

    started, finished = [r for r in caplog.records if r.levelno == logging.INFO]
    assert started.context["operation"] == "create_task"
    assert started.context["operation_id"] == finished.context["operation_id"]
