"""Signup, login, logout and current-user endpoints (cookie sessions)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import end_session, get_current_user, start_session
from app.core.database import get_db
from app.models import User
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)
from app.services.activity import log_activity
from app.services.auth import authenticate, register_user

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account with role 'user' and start a session for it."""
    user = register_user(db, body.name, body.email, body.password)
    start_session(response, user)
    log_activity(db, user.id, "Created", "user", user.id, "Signed up")
    return AuthResponse(message="Signup successful", user=CurrentUser.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password and set the session cookie.
    Unknown email and wrong password both return 401 with the same message.
    """
    user = authenticate(db, body.email, body.password)
    start_session(response, user)
    return AuthResponse(message="Login successful", user=CurrentUser.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Succeeds whether or not a session existed."""
    end_session(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=CurrentUser)
def me(user: Annotated[User, Depends(get_current_user)]) -> CurrentUser:
    return CurrentUser.model_validate(user)
