"""
User account endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, status

from chirpy.auth.dependencies import get_current_user_id, get_session_service
from chirpy.auth.session import SessionService
from chirpy.schemas.user import UserCreate, UserUpdate, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    service: SessionService = Depends(get_session_service),
):
    """Register a new account."""
    account = await service.register(user_data.email, user_data.password)
    return UserResponse.model_validate(account)


@router.put("", response_model=UserResponse)
async def update_user(
    user_data: UserUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """
    Replace the caller's email and password.

    Requires a valid access token in the ``Bearer`` header.
    """
    account = await service.update_account(user_id, user_data.email, user_data.password)
    return UserResponse.model_validate(account)
