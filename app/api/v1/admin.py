"""Admin user management. Every route requires the stored role 'admin'."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.models import User
from app.schemas.admin import RoleUpdateRequest, UserListItem, UserResponse, UsersListResponse
from app.schemas.auth import MessageResponse
from app.schemas.pagination import Pagination
from app.services import users as user_service
from app.services.activity import log_activity

router = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = user_service.find_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> UsersListResponse:
    """List all users, newest first (no password hashes)."""
    users = user_service.list_users(db, offset=(page - 1) * limit, limit=limit)
    total = user_service.count_users(db)
    return UsersListResponse(
        users=[UserListItem.model_validate(u) for u in users],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return UserResponse(user=UserListItem.model_validate(_get_user_or_404(db, user_id)))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Change a user's role. Existing sessions keep their token role for routing,
    but authorization reads the new role on the next request.
    """
    user = _get_user_or_404(db, user_id)
    user = user_service.update_role(db, user, body.role)
    log_activity(
        db, admin.id, "Updated", "user", user.id, f"Changed role of {user.email} to {user.role}"
    )
    return UserResponse(user=UserListItem.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    if admin.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )
    user = _get_user_or_404(db, user_id)
    email = user.email
    user_service.delete_user(db, user)
    log_activity(db, admin.id, "Deleted", "user", user_id, f"Deleted user: {email}")
    return MessageResponse(message="User deleted successfully")
