import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import APP_NAME, APP_VERSION, CORS_ORIGINS
from .exception_handlers import register_exception_handlers
from .logging_config import setup_logging
from .repositories import InMemoryTaskRepository, TaskRepository
from .routers import tasks
from .services import TaskManager

logger = logging.getLogger(__name__)


def create_app(repository: Optional[TaskRepository] = None) -> FastAPI:
    """Build the API application.

    Each application owns its own task repository; pass one in to share or
    pre-populate it.
    """
    app = FastAPI(
        title=APP_NAME,
        description="In-memory task tracking REST API",
        version=APP_VERSION,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if repository is None:
        repository = InMemoryTaskRepository()
    app.state.task_service = TaskManager(repository)

    # Include routers
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])
    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": APP_NAME}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("%s %s ready", APP_NAME, APP_VERSION)
    return app


setup_logging()
app = create_app()
