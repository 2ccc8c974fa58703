from .task_repository import InMemoryTaskRepository, TaskRepository

__all__ = ["InMemoryTaskRepository", "TaskRepository"]
