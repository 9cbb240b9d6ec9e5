"""User Management — list, create, update and delete platform users.

Invariants:
    - Path ids are UUIDs (malformed id → 400 before any backend call)
    - Search (q) is applied in-process over the ordered list, like the admin screen
    - Backend failures surface through AuroraError handlers with the backend message
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from aurora_admin.api.dependencies import get_user_service
from aurora_admin.core.domain_types import UserId
from aurora_admin.core.filter_records import filter_users
from aurora_admin.schemas.user import UserCreate, UserResponse, UserUpdate
from aurora_admin.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    q: str | None = Query(None, max_length=200),
    service: UserService = Depends(get_user_service),
):
    """List users ordered by name, optionally filtered by name/email substring."""
    users = await service.list_users()
    return filter_users(users, q)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create auth account + profile. The user may need to confirm the e-mail."""
    return await service.create_user(body.model_dump(mode="json"))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(UserId(str(user_id)), body.to_payload())


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    await service.delete_user(UserId(str(user_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
