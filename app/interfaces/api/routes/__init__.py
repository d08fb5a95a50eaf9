from fastapi import FastAPI

from .activities import router as activities_router
from .audit_logs import router as audit_logs_router
from .auth import router as auth_router
from .comments import router as comments_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Registra todos os routers da API na aplicação FastAPI."""

    app.include_router(auth_router)
    app.include_router(activities_router)
    app.include_router(comments_router)
    app.include_router(notifications_router)
    app.include_router(audit_logs_router)
