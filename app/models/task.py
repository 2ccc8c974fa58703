import enum
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel


class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Task(BaseModel):
    """Task entity held by the task repository.

    ``id`` and both timestamps stay ``None`` until the repository saves the
    task for the first time.
    """

    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = TaskStatus.TODO
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def touch(self) -> None:
        """Refresh ``updated_at``, always moving it forward."""
        now = datetime.now()
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now
