from .task_service import TaskManager, TaskService

__all__ = ["TaskManager", "TaskService"]
