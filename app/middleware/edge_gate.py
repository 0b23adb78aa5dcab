"""
Edge gate: coarse route-level access rules applied before any handler runs.

Paths are classified by prefix as protected, auth-only (login/signup) and
admin-only. The decision depends only on the path and the session token; the
token's role is trusted for routing here, handlers re-check the stored role.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse

from app.core.security import SessionClaims
from app.core.session import SessionManager
from app.models import Role

logger = logging.getLogger(__name__)

API_PATH_PREFIX = "/api"


class RouteClass(str, Enum):
    PROTECTED = "protected"
    AUTH_ONLY = "auth_only"
    ADMIN_ONLY = "admin_only"


class GateAction(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"
    REJECT = "reject"


@dataclass(frozen=True)
class GateDecision:
    action: GateAction
    location: str | None = None
    status_code: int | None = None
    detail: str | None = None


ALLOW = GateDecision(GateAction.ALLOW)


@dataclass(frozen=True)
class RouteRules:
    """Route prefixes and redirect targets; built from Settings."""

    protected: tuple[str, ...]
    auth_only: tuple[str, ...]
    admin_only: tuple[str, ...]
    login_path: str
    dashboard_path: str

    @classmethod
    def from_settings(cls, settings) -> "RouteRules":
        return cls(
            protected=tuple(settings.PROTECTED_ROUTE_PREFIXES),
            auth_only=tuple(settings.AUTH_ROUTE_PREFIXES),
            admin_only=tuple(settings.ADMIN_ROUTE_PREFIXES),
            login_path=settings.LOGIN_PATH,
            dashboard_path=settings.DASHBOARD_PATH,
        )


def matches_prefix(path: str, prefix: str) -> bool:
    """Match the prefix itself or any sub-path ('/dashboard' matches '/dashboard/tasks')."""
    prefix = prefix.rstrip("/")
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


def is_api_path(path: str) -> bool:
    return matches_prefix(path, API_PATH_PREFIX)


def classify(path: str, rules: RouteRules) -> frozenset[RouteClass]:
    classes = set()
    if any(matches_prefix(path, p) for p in rules.protected):
        classes.add(RouteClass.PROTECTED)
    if any(matches_prefix(path, p) for p in rules.auth_only):
        classes.add(RouteClass.AUTH_ONLY)
    if any(matches_prefix(path, p) for p in rules.admin_only):
        classes.add(RouteClass.ADMIN_ONLY)
    return frozenset(classes)


def evaluate(path: str, claims: SessionClaims | None, rules: RouteRules) -> GateDecision:
    """
    Decide what happens to a request. Checks run in a fixed order and the
    first rejection or redirect wins: protected, then admin-only, then auth-only.
    """
    classes = classify(path, rules)

    if RouteClass.PROTECTED in classes and claims is None:
        if is_api_path(path):
            return GateDecision(GateAction.REJECT, status_code=401, detail="Not authenticated")
        return GateDecision(GateAction.REDIRECT, location=rules.login_path)

    if RouteClass.ADMIN_ONLY in classes and (claims is None or claims.role != Role.ADMIN.value):
        return GateDecision(GateAction.REJECT, status_code=403, detail="Admin access required")

    if RouteClass.AUTH_ONLY in classes and claims is not None:
        return GateDecision(GateAction.REDIRECT, location=rules.dashboard_path)

    return ALLOW


class EdgeGateMiddleware:
    """ASGI middleware applying evaluate() to every HTTP request."""

    def __init__(self, app, *, sessions: SessionManager, rules: RouteRules) -> None:
        self.app = app
        self.sessions = sessions
        self.rules = rules

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive)
        path = request.url.path
        decision = evaluate(path, self.sessions.current(request), self.rules)

        if decision.action is GateAction.ALLOW:
            return await self.app(scope, receive, send)

        if decision.action is GateAction.REDIRECT:
            logger.debug("Edge gate redirect: path=%s location=%s", path, decision.location)
            response = RedirectResponse(url=decision.location, status_code=307)
        else:
            logger.info("Edge gate rejected: path=%s status=%s", path, decision.status_code)
            response = JSONResponse(
                status_code=decision.status_code,
                content={"detail": decision.detail},
            )
        await response(scope, receive, send)
