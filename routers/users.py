# routers/users.py
from fastapi import APIRouter, Body, Depends, Request, status
from typing import Any, Dict

from routers.deps import get_user_service
from schemas.user import UserEnvelope, UserPageEnvelope, UserResponse
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
):
    user = await service.create_user(payload)
    return {"message": "User created successfully", "usuario": user}


@router.get("", response_model=UserPageEnvelope)
async def list_users(request: Request, service: UserService = Depends(get_user_service)):
    page = await service.list_users(request.query_params)
    return {"usuarios": page}


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.patch("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user(user_id, payload)
    return {"message": "User updated successfully", "usuario": user}


@router.delete("/{user_id}", response_model=UserEnvelope)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Deletes the user and every task it owns."""
    user = await service.delete_user(user_id)
    return {"message": "User deleted successfully", "usuario": user}
