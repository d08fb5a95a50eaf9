import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import get_settings
from app.interfaces.api.routes import register_routes
from app.infrastructure.database import initialize_database, engine
from app.infrastructure.notifications import shutdown_notification_queue


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa o banco ao subir e libera os recursos ao encerrar."""

    initialize_database()
    yield
    shutdown_notification_queue(wait=False)
    engine.dispose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI principal."""

    app = FastAPI(title="Plano de Ação API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


def run(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Sobe a API com o uvicorn."""

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run()
