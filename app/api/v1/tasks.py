"""Task endpoints: owner-scoped CRUD, filtering, pagination and stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.database import get_db
from app.models import User
from app.schemas.auth import MessageResponse
from app.schemas.pagination import Pagination
from app.schemas.task import (
    ActivityLogOut,
    TaskCreate,
    TaskListResponse,
    TaskMutationResponse,
    TaskOut,
    TaskPriority,
    TaskResponse,
    TaskStats,
    TaskStatsResponse,
    TaskStatus,
    TaskUpdate,
)
from app.services import tasks as task_service
from app.services.activity import log_activity, recent_activity

router = APIRouter()

# Columns that may be cleared with an explicit null in PATCH.
NULLABLE_TASK_FIELDS = frozenset({"description", "due_date"})


def _get_owned_task_or_404(db: Session, user: User, task_id: int):
    task = task_service.get_task(db, user.id, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=TaskListResponse)
def list_tasks(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: Annotated[TaskPriority | None, Query()] = None,
) -> TaskListResponse:
    """List the current user's tasks, newest first, optionally filtered by status and priority."""
    tasks, total = task_service.list_tasks(
        db,
        user.id,
        status=status_filter,
        priority=priority,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return TaskListResponse(
        tasks=[TaskOut.model_validate(t) for t in tasks],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> TaskMutationResponse:
    task = task_service.create_task(db, user.id, body.model_dump())
    log_activity(db, user.id, "Created", "task", task.id, f"Created new task: {task.title}")
    return TaskMutationResponse(message="Task created successfully", task=TaskOut.model_validate(task))


@router.get("/stats", response_model=TaskStatsResponse)
def get_stats(
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> TaskStatsResponse:
    """Counts by status/priority plus the 10 most recent activity entries."""
    stats = task_service.task_stats(db, user.id)
    return TaskStatsResponse(
        stats=TaskStats(**stats),
        recent_activity=[ActivityLogOut.model_validate(a) for a in recent_activity(db, user.id, 10)],
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> TaskResponse:
    task = _get_owned_task_or_404(db, user, task_id)
    return TaskResponse(task=TaskOut.model_validate(task))


@router.patch("/{task_id}", response_model=TaskMutationResponse)
def update_task(
    task_id: int,
    body: TaskUpdate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> TaskMutationResponse:
    """Partially update a task; only fields present in the body change."""
    task = _get_owned_task_or_404(db, user, task_id)
    updates = {
        name: value
        for name, value in body.model_dump(exclude_unset=True).items()
        if value is not None or name in NULLABLE_TASK_FIELDS
    }
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    task = task_service.update_task(db, task, updates)
    log_activity(
        db,
        user.id,
        "Updated",
        "task",
        task.id,
        f"Updated task fields: {', '.join(updates)}",
    )
    return TaskMutationResponse(message="Task updated successfully", task=TaskOut.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    task = _get_owned_task_or_404(db, user, task_id)
    title = task.title
    task_service.delete_task(db, task)
    log_activity(db, user.id, "Deleted", "task", task_id, f"Deleted task: {title}")
    return MessageResponse(message="Task deleted successfully")
