import logging
from typing import List, Optional, Protocol

from ..exceptions import InvalidArgumentError, TaskNotFoundError
from ..models import Task, TaskStatus
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


class TaskService(Protocol):
    """Business operations on tasks, as used by the API routers."""

    def get_all_tasks(self) -> List[Task]: ...

    def get_task_by_id(self, task_id: Optional[int]) -> Task: ...

    def create_task(self, task: Optional[Task]) -> Task: ...

    def update_task(self, task_id: Optional[int], task_update: Optional[Task]) -> Task: ...

    def delete_task(self, task_id: Optional[int]) -> None: ...

    def get_tasks_by_status(self, status: Optional[TaskStatus]) -> List[Task]: ...

    def get_task_count(self) -> int: ...

    def delete_all_tasks(self) -> None: ...

    def get_task_statistics(self) -> dict: ...


class TaskManager:
    """Validates task input and applies business rules on top of a repository.

    Every rule violation raises ``InvalidArgumentError``; lookups of missing
    tasks raise ``TaskNotFoundError``.
    """

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def get_all_tasks(self) -> List[Task]:
        logger.debug("Retrieving all tasks")
        tasks = self.repository.find_all()
        logger.info("Retrieved %d tasks", len(tasks))
        return tasks

    def get_task_by_id(self, task_id: Optional[int]) -> Task:
        logger.debug("Retrieving task with id: %s", task_id)
        _validate_id(task_id)

        task = self.repository.find_by_id(task_id)
        if task is None:
            logger.error("Task not found with id: %s", task_id)
            raise TaskNotFoundError(task_id)
        return task

    def create_task(self, task: Optional[Task]) -> Task:
        logger.debug("Creating new task with title: %s", task.title if task is not None else None)
        if task is None:
            logger.error("Task cannot be null")
            raise InvalidArgumentError("Task cannot be null")
        _validate_task_fields(task)

        # Whatever the caller sent, a created task is always new.
        task.id = None

        saved = self.repository.save(task)
        logger.info("Created new task with id: %s and title: %s", saved.id, saved.title)
        return saved

    def update_task(self, task_id: Optional[int], task_update: Optional[Task]) -> Task:
        """Merge ``task_update`` into the stored task.

        The title is replaced only by a non-blank value and the status only
        by a non-null one. The description is replaced whenever the update
        explicitly carries it, so ``None`` or ``""`` clears it.
        """
        logger.debug("Updating task with id: %s", task_id)
        _validate_id(task_id)
        if task_update is None:
            logger.error("Task update data cannot be null")
            raise InvalidArgumentError("Task update data cannot be null")
        _validate_task_fields(task_update, title_required=False)

        existing = self.get_task_by_id(task_id)
        fields_set = task_update.model_fields_set

        if task_update.title is not None and task_update.title.strip():
            existing.title = task_update.title
        if "description" in fields_set:
            existing.description = task_update.description
        if "status" in fields_set and task_update.status is not None:
            existing.status = task_update.status
        logger.debug("Updated task fields for task id: %s", existing.id)

        updated = self.repository.save(existing)
        logger.info("Updated task with id: %s and title: %s", updated.id, updated.title)
        return updated

    def delete_task(self, task_id: Optional[int]) -> None:
        logger.debug("Deleting task with id: %s", task_id)
        _validate_id(task_id)

        if not self.repository.exists_by_id(task_id):
            logger.error("Attempted to delete non-existent task with id: %s", task_id)
            raise TaskNotFoundError(task_id)

        self.repository.delete_by_id(task_id)
        logger.info("Deleted task with id: %s", task_id)

    def get_tasks_by_status(self, status: Optional[TaskStatus]) -> List[Task]:
        logger.debug("Retrieving tasks with status: %s", status)
        if status is None:
            logger.error("Task status cannot be null")
            raise InvalidArgumentError("Task status cannot be null")

        tasks = self.repository.find_by_status(status)
        logger.info("Retrieved %d tasks with status: %s", len(tasks), status.value)
        return tasks

    def get_task_count(self) -> int:
        count = self.repository.count()
        logger.debug("Total task count: %d", count)
        return count

    def delete_all_tasks(self) -> None:
        logger.debug("Deleting all tasks")
        previous_count = self.repository.count()
        self.repository.delete_all()
        logger.info("Deleted all tasks. Previous count: %d", previous_count)

    def get_task_statistics(self) -> dict:
        return self.repository.get_statistics()


def _validate_id(task_id: Optional[int]) -> None:
    if task_id is None:
        logger.error("Task ID cannot be null")
        raise InvalidArgumentError("Task ID cannot be null")
    if task_id <= 0:
        logger.error("Task ID must be positive, received: %s", task_id)
        raise InvalidArgumentError("Task ID must be positive")


def _validate_task_fields(task: Task, title_required: bool = True) -> None:
    """Check title and description bounds.

    Creation payloads must carry a title and get ``TODO`` when their status
    is missing. Update payloads are partial: a blank title means "keep the
    current one" and a missing status is left alone.
    """
    title = task.title
    if title is None or not title.strip():
        if title_required:
            logger.error("Task title cannot be null or empty")
            raise InvalidArgumentError("Task title is required")
    elif len(title) > MAX_TITLE_LENGTH:
        logger.error("Task title too long: %d characters", len(title))
        raise InvalidArgumentError(f"Task title must not exceed {MAX_TITLE_LENGTH} characters")

    if task.description is not None and len(task.description) > MAX_DESCRIPTION_LENGTH:
        logger.error("Task description too long: %d characters", len(task.description))
        raise InvalidArgumentError(f"Task description must not exceed {MAX_DESCRIPTION_LENGTH} characters")

    if title_required and task.status is None:
        logger.warning("Task status is null, setting default to TODO")
        task.status = TaskStatus.TODO
