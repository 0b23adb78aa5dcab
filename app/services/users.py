"""Credential store: lookups and admin mutations on the users table."""

import logging

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import ActivityLog, Role, Task, User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: Role = Role.USER,
) -> User:
    """Insert a user with a hashed password. Caller checks email uniqueness first."""
    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created: user_id=%s role=%s", user.id, user.role)
    return user


def list_users(db: Session, offset: int, limit: int) -> list[User]:
    return (
        db.query(User)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_users(db: Session) -> int:
    return db.query(User).count()


def update_role(db: Session, user: User, role: Role) -> User:
    """Set a user's role; takes effect on their next request."""
    previous = user.role
    user.role = role.value
    db.commit()
    db.refresh(user)
    logger.info(
        "User role changed: user_id=%s from=%s to=%s", user.id, previous, user.role
    )
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete a user with their tasks and activity. Their session stops resolving."""
    user_id = user.id
    db.query(Task).filter(Task.user_id == user_id).delete(synchronize_session=False)
    db.query(ActivityLog).filter(ActivityLog.user_id == user_id).delete(
        synchronize_session=False
    )
    db.delete(user)
    db.commit()
    logger.info("User deleted: user_id=%s", user_id)
