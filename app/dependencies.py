from fastapi import Request

from .services import TaskService


def get_task_service(request: Request) -> TaskService:
    """Dependency returning the task service owned by the running app."""
    return request.app.state.task_service
