"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.auth import router as auth_router
from app.api.deps import get_session_manager
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.errors import AuthError, AuthErrorKind
from app.middleware.edge_gate import EdgeGateMiddleware, RouteRules, is_api_path
from app.web.pages import router as pages_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Taskboard API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    EdgeGateMiddleware,
    sessions=get_session_manager(),
    rules=RouteRules.from_settings(settings),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    """Map the error kind to a status code. Pages get a redirect to the login page instead of a 401."""
    if exc.kind is AuthErrorKind.UNAUTHENTICATED and not is_api_path(request.url.path):
        response = RedirectResponse(url=settings.LOGIN_PATH, status_code=307)
    else:
        response = JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    if exc.kind is AuthErrorKind.UNAUTHENTICATED:
        # Drop a cookie that no longer resolves to a user so the gate stops trusting it.
        get_session_manager().end(response)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(pages_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Taskboard API", "docs": "/docs"}
