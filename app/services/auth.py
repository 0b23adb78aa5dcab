"""Signup and credential checks for the login flow."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AuthError
from app.core.security import verify_password
from app.models import User
from app.services.users import create_user, find_user_by_email

logger = logging.getLogger(__name__)


def _email_in_use() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Email already in use",
    )


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """
    Create a 'user'-role account; 400 if the email is taken.

    The lookup covers the common case; the unique index on users.email
    settles concurrent signups for the same address.
    """
    if find_user_by_email(db, email) is not None:
        raise _email_in_use()
    try:
        return create_user(db, name, email, password)
    except IntegrityError:
        db.rollback()
        logger.info("Signup lost race on duplicate email=%s", email)
        raise _email_in_use() from None


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for valid credentials.

    Unknown email and wrong password raise the same INVALID_CREDENTIALS error.
    """
    user = find_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed for email=%s", email)
        raise AuthError.invalid_credentials()
    return user
