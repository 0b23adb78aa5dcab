"""Pydantic request/response schemas."""

from app.schemas.admin import RoleUpdateRequest, UserListItem, UserResponse, UsersListResponse
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.pagination import Pagination
from app.schemas.task import (
    ActivityLogOut,
    TaskCreate,
    TaskListResponse,
    TaskMutationResponse,
    TaskOut,
    TaskResponse,
    TaskStats,
    TaskStatsResponse,
    TaskUpdate,
)

__all__ = [
    "ActivityLogOut",
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "RoleUpdateRequest",
    "SignupRequest",
    "TaskCreate",
    "TaskListResponse",
    "TaskMutationResponse",
    "TaskOut",
    "TaskResponse",
    "TaskStats",
    "TaskStatsResponse",
    "TaskUpdate",
    "UserListItem",
    "UserResponse",
    "UsersListResponse",
]
