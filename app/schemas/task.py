"""Pydantic schemas for task CRUD and dashboard statistics."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.pagination import Pagination

TaskStatus = Literal["todo", "in-progress", "done", "backlog"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    """Body for POST /tasks."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=10000)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: date | None = None


class TaskUpdate(BaseModel):
    """Body for PATCH /tasks/{id}; only fields present in the body are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=10000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None


class TaskOut(BaseModel):
    id: int
    title: str
    description: str | None
    status: str
    priority: str
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskResponse(BaseModel):
    task: TaskOut


class TaskMutationResponse(BaseModel):
    message: str
    task: TaskOut


class TaskListResponse(BaseModel):
    tasks: list[TaskOut]
    pagination: Pagination


class TaskStats(BaseModel):
    """Per-user counts; completed is status 'done'."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    todo: int = 0
    high_priority: int = 0
    overdue: int = 0


class ActivityLogOut(BaseModel):
    id: int
    action: str
    entity_type: str
    entity_id: int | None
    details: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class TaskStatsResponse(BaseModel):
    stats: TaskStats
    recent_activity: list[ActivityLogOut]
