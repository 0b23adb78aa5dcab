"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, health, tasks

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(admin.router, prefix="/admin/users", tags=["admin"])
