# src/tracker/api/users.py
"""
Users endpoints. Users are read-only through the API.
"""

from typing import List

from fastapi import APIRouter, Depends

from .dependencies import get_user_repository
from ..models import User
from ..repositories import UserRepository

router = APIRouter()


@router.get(
    "",
    response_model=List[User],
    response_model_exclude_none=True,
    summary="Returns all users",
)
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    return repo.list()
