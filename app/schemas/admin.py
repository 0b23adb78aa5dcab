"""Schemas for the admin user-management endpoints."""

from datetime import datetime

from pydantic import BaseModel

from app.models import Role
from app.schemas.pagination import Pagination


class UserListItem(BaseModel):
    """User entry for admin views (no password hash)."""

    id: int
    name: str
    email: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    users: list[UserListItem]
    pagination: Pagination


class UserResponse(BaseModel):
    user: UserListItem


class RoleUpdateRequest(BaseModel):
    role: Role
