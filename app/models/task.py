"""ORM model for user-owned tasks."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func

from app.models.base import Base


class Task(Base):
    """A personal task; only its owner (user_id) may read or modify it."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default="todo", index=True)
    priority = Column(String(16), nullable=False, default="medium", index=True)
    due_date = Column(Date, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
