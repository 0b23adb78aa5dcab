"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field

from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class SignupRequest(LoginRequest):
    """New account details; the account always starts with role 'user'."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")


class CurrentUser(BaseModel):
    """Authenticated user (id, name, email, role) as currently stored."""

    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Returned by login and signup; the session itself travels in the cookie."""

    message: str
    user: CurrentUser


class MessageResponse(BaseModel):
    message: str
