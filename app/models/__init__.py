"""SQLAlchemy ORM models."""

from app.models.activity_log import ActivityLog
from app.models.base import Base
from app.models.task import Task
from app.models.user import Role, User

__all__ = [
    "ActivityLog",
    "Base",
    "Role",
    "Task",
    "User",
]
