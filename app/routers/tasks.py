import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_task_service
from ..models import Task, TaskStatus
from ..schemas.task import (
    TaskCountResponse,
    TaskCreate,
    TaskResponse,
    TaskStatisticsResponse,
    TaskUpdate,
)
from ..services import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_update_data(task_update: TaskUpdate) -> dict:
    return task_update.model_dump(exclude_unset=True)


@router.get("/tasks", response_model=List[TaskResponse])
def get_tasks(
    status: Optional[TaskStatus] = None,
    service: TaskService = Depends(get_task_service),
):
    """List every task, or only those with the given ``status``."""
    if status is None:
        logger.info("GET /api/tasks - Retrieving all tasks")
        tasks = service.get_all_tasks()
        logger.info("GET /api/tasks - Successfully retrieved %d tasks", len(tasks))
        return tasks

    logger.info("GET /api/tasks?status=%s - Retrieving tasks by status", status.value)
    tasks = service.get_tasks_by_status(status)
    logger.info("GET /api/tasks?status=%s - Successfully retrieved %d tasks", status.value, len(tasks))
    return tasks


@router.get("/tasks/count", response_model=TaskCountResponse)
def get_task_count(service: TaskService = Depends(get_task_service)):
    logger.info("GET /api/tasks/count - Retrieving task count")
    count = service.get_task_count()
    logger.info("GET /api/tasks/count - Total tasks: %d", count)
    return TaskCountResponse(count=count)


@router.get("/tasks/stats", response_model=TaskStatisticsResponse)
def get_task_statistics(service: TaskService = Depends(get_task_service)):
    logger.info("GET /api/tasks/stats - Retrieving task statistics")
    return TaskStatisticsResponse.model_validate(service.get_task_statistics())


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    logger.info("GET /api/tasks/%s - Retrieving task by ID", task_id)
    task = service.get_task_by_id(task_id)
    logger.info("GET /api/tasks/%s - Successfully retrieved task: %s", task_id, task.title)
    return task


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, service: TaskService = Depends(get_task_service)):
    logger.info("POST /api/tasks - Creating new task with title: %s", task.title)
    created = service.create_task(Task(**task.model_dump()))
    logger.info(
        "POST /api/tasks - Successfully created task with ID: %s and title: %s",
        created.id,
        created.title,
    )
    return created


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Partially update a task; see ``TaskManager.update_task`` for merge rules."""
    logger.info("PUT /api/tasks/%s - Updating task with title: %s", task_id, task_update.title)
    updated = service.update_task(task_id, Task(**_get_update_data(task_update)))
    logger.info("PUT /api/tasks/%s - Successfully updated task: %s", task_id, updated.title)
    return updated


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    logger.info("DELETE /api/tasks/%s - Deleting task", task_id)
    service.delete_task(task_id)
    logger.info("DELETE /api/tasks/%s - Successfully deleted task", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/tasks", status_code=status.HTTP_204_NO_CONTENT)
def delete_all_tasks(service: TaskService = Depends(get_task_service)):
    logger.info("DELETE /api/tasks - Deleting all tasks")
    service.delete_all_tasks()
    logger.info("DELETE /api/tasks - Successfully deleted all tasks")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
