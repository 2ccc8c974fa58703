import logging
import threading
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from ..exceptions import InvalidArgumentError
from ..models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    """Storage port used by the task service."""

    def find_all(self) -> List[Task]: ...

    def find_by_id(self, task_id: Optional[int]) -> Optional[Task]: ...

    def save(self, task: Task) -> Task: ...

    def delete_by_id(self, task_id: Optional[int]) -> None: ...

    def exists_by_id(self, task_id: Optional[int]) -> bool: ...

    def find_by_status(self, status: Optional[TaskStatus]) -> List[Task]: ...

    def count(self) -> int: ...

    def delete_all(self) -> None: ...

    def get_statistics(self) -> dict: ...


class InMemoryTaskRepository:
    """Thread-safe in-memory task store.

    The task map and the id sequence each have their own lock, so every
    method is atomic on its own. Nothing spans two calls: callers that check
    and then act (exists then delete, read then save) can race with other
    threads.

    Tasks are copied on the way in and on the way out, so callers never hold
    a reference into the store.
    """

    INITIAL_ID = 1

    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._lock = threading.Lock()
        self._next_id = self.INITIAL_ID
        self._id_lock = threading.Lock()

    def _generate_id(self) -> int:
        with self._id_lock:
            task_id = self._next_id
            self._next_id += 1
            return task_id

    def find_all(self) -> List[Task]:
        with self._lock:
            logger.debug("Finding all tasks. Current count: %d", len(self._tasks))
            return [task.model_copy() for task in self._tasks.values()]

    def find_by_id(self, task_id: Optional[int]) -> Optional[Task]:
        logger.debug("Finding task by id: %s", task_id)
        if task_id is None:
            logger.warning("Attempted to find task with null id")
            return None

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.debug("Task not found with id: %s", task_id)
                return None
            logger.debug("Found task: %s", task.title)
            return task.model_copy()

    def save(self, task: Task) -> Task:
        if task is None:
            logger.error("Attempted to save null task")
            raise InvalidArgumentError("Task cannot be null")

        if task.id is None:
            task.id = self._generate_id()
            now = datetime.now()
            task.created_at = now
            task.updated_at = now
            logger.debug("Creating new task with id: %s and title: %s", task.id, task.title)
        else:
            task.touch()
            if task.created_at is None:
                task.created_at = task.updated_at
            with self._id_lock:
                self._next_id = max(self._next_id, task.id + 1)
            logger.debug("Updating existing task with id: %s and title: %s", task.id, task.title)

        with self._lock:
            self._tasks[task.id] = task.model_copy()

        logger.info("Task saved successfully with id: %s", task.id)
        return task

    def delete_by_id(self, task_id: Optional[int]) -> None:
        if task_id is None:
            logger.warning("Attempted to delete task with null id")
            return

        with self._lock:
            removed = self._tasks.pop(task_id, None)

        if removed is not None:
            logger.info("Task deleted successfully with id: %s", task_id)
        else:
            logger.warning("Attempted to delete non-existent task with id: %s", task_id)

    def exists_by_id(self, task_id: Optional[int]) -> bool:
        if task_id is None:
            return False

        with self._lock:
            exists = task_id in self._tasks
        logger.debug("Task existence check for id %s: %s", task_id, exists)
        return exists

    def find_by_status(self, status: Optional[TaskStatus]) -> List[Task]:
        logger.debug("Finding tasks by status: %s", status)
        if status is None:
            logger.warning("Attempted to find tasks with null status")
            return []

        with self._lock:
            matching = [task.model_copy() for task in self._tasks.values() if task.status == status]
        logger.debug("Found %d tasks with status: %s", len(matching), status)
        return matching

    def count(self) -> int:
        with self._lock:
            count = len(self._tasks)
        logger.debug("Total task count: %d", count)
        return count

    def delete_all(self) -> None:
        with self._lock:
            previous_size = len(self._tasks)
            self._tasks.clear()
        with self._id_lock:
            self._next_id = self.INITIAL_ID
        logger.info("Deleted all tasks. Previous count: %d", previous_size)

    def get_statistics(self) -> dict:
        """Snapshot of the store: size, next id and a per-status breakdown."""
        with self._lock:
            by_status = Counter(task.status for task in self._tasks.values())
            total = len(self._tasks)
        with self._id_lock:
            next_id = self._next_id

        stats = {
            "totalTasks": total,
            "nextId": next_id,
            "tasksByStatus": {status.value: by_status.get(status, 0) for status in TaskStatus},
        }
        logger.debug("Repository statistics: %s", stats)
        return stats
