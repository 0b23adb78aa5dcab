"""ORM model for application users (auth and RBAC)."""

from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class Role(str, Enum):
    """Roles recognised by the access guard."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User account for cookie session authentication and role-based access control.

    role: 'admin' or 'user'. This column, not the role embedded in a session
    token, is authoritative for authorization.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value, server_default=Role.USER.value)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
