"""Server-rendered dashboard pages. Data comes from the same services as the API."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.api.deps import end_session, get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.models import User
from app.services import tasks as task_service
from app.services.activity import recent_activity

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")
router = APIRouter(include_in_schema=False)


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return templates.TemplateResponse(
        request, "login.html", {"title": "Log in", "dashboard_path": settings.DASHBOARD_PATH}
    )


@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    return templates.TemplateResponse(
        request, "signup.html", {"title": "Sign up", "dashboard_path": settings.DASHBOARD_PATH}
    )


@router.post("/logout")
def logout_page() -> RedirectResponse:
    response = RedirectResponse(url=settings.LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    end_session(response)
    return response


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    """Overview: task counters and the five latest activity entries."""
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": "Dashboard Overview",
            "user": user,
            "stats": task_service.task_stats(db, user.id),
            "entries": recent_activity(db, user.id, limit=5),
        },
    )


@router.get("/dashboard/tasks", response_class=HTMLResponse)
def tasks_page(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
):
    tasks, _ = task_service.list_tasks(db, user.id, limit=100)
    return templates.TemplateResponse(
        request, "tasks.html", {"title": "Tasks", "user": user, "tasks": tasks}
    )


@router.get("/dashboard/profile", response_class=HTMLResponse)
def profile_page(request: Request, user: Annotated[User, Depends(get_current_user)]):
    return templates.TemplateResponse(
        request, "profile.html", {"title": "Profile", "user": user}
    )
