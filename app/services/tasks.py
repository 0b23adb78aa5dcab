"""Owner-scoped task queries, mutations and dashboard statistics."""

from datetime import date
from typing import Any

from sqlalchemy import case, func
from sqlalchemy.orm import Query, Session

from app.models import Task

DONE_STATUS = "done"


def _owned(db: Session, user_id: int) -> Query:
    return db.query(Task).filter(Task.user_id == user_id)


def list_tasks(
    db: Session,
    user_id: int,
    *,
    status: str | None = None,
    priority: str | None = None,
    offset: int = 0,
    limit: int = 10,
) -> tuple[list[Task], int]:
    """Return one page of the user's tasks (newest first) and the filtered total."""
    q = _owned(db, user_id)
    if status:
        q = q.filter(Task.status == status)
    if priority:
        q = q.filter(Task.priority == priority)
    total = q.count()
    tasks = (
        q.order_by(Task.created_at.desc(), Task.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return tasks, total


def get_task(db: Session, user_id: int, task_id: int) -> Task | None:
    """Fetch a task only if user_id owns it."""
    return _owned(db, user_id).filter(Task.id == task_id).first()


def create_task(db: Session, user_id: int, fields: dict[str, Any]) -> Task:
    task = Task(user_id=user_id, **fields)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task: Task, updates: dict[str, Any]) -> Task:
    for name, value in updates.items():
        setattr(task, name, value)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task) -> None:
    db.delete(task)
    db.commit()


def task_stats(db: Session, user_id: int, today: date | None = None) -> dict[str, int]:
    """
    Aggregate counts for the dashboard.

    completed counts status 'done'; high_priority and overdue exclude done tasks.
    """
    today = today or date.today()
    not_done = Task.status != DONE_STATUS
    row = (
        db.query(
            func.count(Task.id),
            func.sum(case((Task.status == DONE_STATUS, 1), else_=0)),
            func.sum(case((Task.status == "in-progress", 1), else_=0)),
            func.sum(case((Task.status == "todo", 1), else_=0)),
            func.sum(case(((Task.priority == "high") & not_done, 1), else_=0)),
            func.sum(
                case(
                    ((Task.due_date.is_not(None)) & (Task.due_date < today) & not_done, 1),
                    else_=0,
                )
            ),
        )
        .filter(Task.user_id == user_id)
        .one()
    )
    keys = ("total", "completed", "in_progress", "todo", "high_priority", "overdue")
    return {key: int(value or 0) for key, value in zip(keys, row)}
