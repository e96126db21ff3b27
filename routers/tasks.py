# routers/tasks.py
from fastapi import APIRouter, Body, Depends, Request, status
from typing import Any, Dict, List

from routers.deps import get_task_service
from schemas.task import TaskEnvelope, TaskPageEnvelope, TaskResponse
from services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: Dict[str, Any] = Body(...),
    service: TaskService = Depends(get_task_service),
):
    task = await service.create_task(payload)
    return {"message": "Task created successfully", "tarefa": task}


@router.get("", response_model=TaskPageEnvelope)
async def list_tasks(request: Request, service: TaskService = Depends(get_task_service)):
    """
    Filters: titulo, descricao, status, usuario, dataLimiteInicio/Fim,
    dataCriacaoInicio/Fim, dataConclusaoInicio/Fim, comDataConclusao.
    Paging: page, limit (max 100), sortBy, sortOrder.
    """
    page = await service.list_tasks(request.query_params)
    return {"tarefas": page}


@router.get("/titulo/{titulo}", response_model=TaskResponse)
async def find_task_by_title(titulo: str, service: TaskService = Depends(get_task_service)):
    return await service.find_task_by_title(titulo)


@router.get("/status/{task_status}", response_model=List[TaskResponse])
async def find_tasks_by_status(task_status: str, service: TaskService = Depends(get_task_service)):
    return await service.find_tasks_by_status(task_status)


@router.get("/data-limite/{data_limite}", response_model=List[TaskResponse])
async def find_tasks_by_due_date(data_limite: str, service: TaskService = Depends(get_task_service)):
    return await service.find_tasks_by_due_date(data_limite)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return await service.get_task(task_id)


@router.patch("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    payload: Dict[str, Any] = Body(...),
    service: TaskService = Depends(get_task_service),
):
    task = await service.update_task(task_id, payload)
    return {"message": "Task updated successfully", "tarefa": task}


@router.delete("/{task_id}", response_model=TaskEnvelope)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    task = await service.delete_task(task_id)
    return {"message": "Task deleted successfully", "tarefa": task}
