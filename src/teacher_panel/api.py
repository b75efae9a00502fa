from fastapi import APIRouter

from teacher_panel.modules.auth import router as auth_router
from teacher_panel.modules.teacher_applications import router as admin_applications_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(
    admin_applications_router,
    prefix="/admin",
    tags=["Admin - Teacher Applications"],
)
