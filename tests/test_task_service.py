from unittest.mock import Mock

import pytest

from app.exceptions import InvalidArgumentError, TaskNotFoundError
from app.models import Task, TaskStatus
from app.repositories import InMemoryTaskRepository
from app.services import TaskManager


def test_create_task_defaults(service: TaskManager) -> None:
    task = service.create_task(Task(title="Write report"))

    assert task.id == 1
    assert task.title == "Write report"
    assert task.description is None
    assert task.status == TaskStatus.TODO
    assert task.created_at == task.updated_at


def test_create_task_ignores_client_id(service: TaskManager) -> None:
    assert service.create_task(Task(id=42, title="new")).id == 1


def test_create_task_defaults_missing_status(service: TaskManager) -> None:
    assert service.create_task(Task(title="x", status=None)).status == TaskStatus.TODO


def test_create_then_get_round_trips(service: TaskManager) -> None:
    created = service.create_task(Task(title="t", description="d", status=TaskStatus.IN_PROGRESS))

    assert service.get_task_by_id(created.id).model_dump() == created.model_dump()


@pytest.mark.parametrize(
    "task, message",
    [
        (None, "Task cannot be null"),
        (Task(title=None), "Task title is required"),
        (Task(title="   "), "Task title is required"),
        (Task(title="x" * 101), "Task title must not exceed 100 characters"),
        (Task(title="x", description="d" * 501), "Task description must not exceed 500 characters"),
    ],
)
def test_create_task_rejects_invalid_input(service: TaskManager, task, message) -> None:
    with pytest.raises(InvalidArgumentError, match=message):
        service.create_task(task)
    assert service.get_task_count() == 0


def test_create_task_accepts_bounds(service: TaskManager) -> None:
    task = service.create_task(Task(title="x" * 100, description="d" * 500))
    assert task.id == 1


@pytest.mark.parametrize("task_id, message", [(None, "cannot be null"), (0, "must be positive"), (-5, "must be positive")])
def test_get_task_by_id_rejects_bad_ids(service: TaskManager, task_id, message) -> None:
    with pytest.raises(InvalidArgumentError, match=message):
        service.get_task_by_id(task_id)


def test_get_missing_task_raises_not_found(service: TaskManager) -> None:
    with pytest.raises(TaskNotFoundError) as exc_info:
        service.get_task_by_id(999)

    assert str(exc_info.value) == "Task not found with id: 999"
    assert exc_info.value.task_id == 999


def test_update_status_only_keeps_other_fields(service: TaskManager) -> None:
    created = service.create_task(Task(title="Write report", description="first draft"))
    before = service.get_task_by_id(created.id)

    updated = service.update_task(created.id, Task(status=TaskStatus.COMPLETED))

    assert updated.id == before.id
    assert updated.title == "Write report"
    assert updated.description == "first draft"
    assert updated.status == TaskStatus.COMPLETED
    assert updated.created_at == before.created_at
    assert updated.updated_at > before.updated_at


def test_update_replaces_title_and_clears_description(service: TaskManager) -> None:
    created = service.create_task(Task(title="old", description="remove me"))

    updated = service.update_task(created.id, Task(title="new", description=None))

    assert updated.title == "new"
    assert updated.description is None
    assert updated.status == TaskStatus.TODO


def test_update_with_blank_title_keeps_title(service: TaskManager) -> None:
    created = service.create_task(Task(title="keep"))

    assert service.update_task(created.id, Task(title="  ")).title == "keep"


def test_update_validates_input(service: TaskManager) -> None:
    created = service.create_task(Task(title="t"))

    with pytest.raises(InvalidArgumentError, match="update data cannot be null"):
        service.update_task(created.id, None)
    with pytest.raises(InvalidArgumentError, match="must not exceed 100"):
        service.update_task(created.id, Task(title="x" * 101))
    with pytest.raises(InvalidArgumentError, match="must be positive"):
        service.update_task(0, Task(title="x"))
    with pytest.raises(TaskNotFoundError):
        service.update_task(2, Task(title="x"))


def test_delete_then_get_raises_not_found(service: TaskManager) -> None:
    created = service.create_task(Task(title="t"))

    service.delete_task(created.id)

    with pytest.raises(TaskNotFoundError):
        service.get_task_by_id(created.id)


def test_delete_missing_task_raises_not_found_without_touching_store() -> None:
    repository = Mock(spec=InMemoryTaskRepository)
    repository.exists_by_id.return_value = False
    service = TaskManager(repository)

    with pytest.raises(TaskNotFoundError, match="Task not found with id: 7"):
        service.delete_task(7)
    repository.delete_by_id.assert_not_called()


def test_get_tasks_by_status_returns_exact_subset(service: TaskManager) -> None:
    statuses = [TaskStatus.TODO, TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED]
    for i, status in enumerate(statuses):
        service.create_task(Task(title=f"task {i}", status=status))
    service.update_task(1, Task(status=TaskStatus.COMPLETED))

    all_tasks = service.get_all_tasks()
    for status in TaskStatus:
        expected = sorted(t.id for t in all_tasks if t.status == status)
        assert sorted(t.id for t in service.get_tasks_by_status(status)) == expected


def test_get_tasks_by_status_rejects_none() -> None:
    repository = Mock(spec=InMemoryTaskRepository)
    service = TaskManager(repository)

    with pytest.raises(InvalidArgumentError, match="status cannot be null"):
        service.get_tasks_by_status(None)
    repository.find_by_status.assert_not_called()


def test_delete_all_then_create_restarts_ids(service: TaskManager) -> None:
    service.create_task(Task(title="a"))
    service.create_task(Task(title="b"))
    assert service.get_task_count() == 2

    service.delete_all_tasks()

    assert service.get_task_count() == 0
    assert service.create_task(Task(title="c")).id == 1


def test_ids_strictly_increase(service: TaskManager) -> None:
    ids = [service.create_task(Task(title=str(i))).id for i in range(5)]
    service.delete_task(3)
    ids.append(service.create_task(Task(title="after delete")).id)

    assert ids == [1, 2, 3, 4, 5, 6]


def test_task_statistics(service: TaskManager) -> None:
    service.create_task(Task(title="a", status=TaskStatus.COMPLETED))

    stats = service.get_task_statistics()

    assert stats["totalTasks"] == 1
    assert stats["tasksByStatus"]["COMPLETED"] == 1
