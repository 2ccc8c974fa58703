from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from ..models import TaskStatus

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def _check_description(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        raise PydanticCustomError(
            "description_too_long",
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
        )
    return value


class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    Unknown fields, including a client supplied ``id``, are ignored.
    """
    title: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    status: Optional[TaskStatus] = TaskStatus.TODO

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise PydanticCustomError("title_required", "Title is required")
        if len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long",
                f"Title must not exceed {TITLE_MAX_LENGTH} characters",
            )
        return value

    @field_validator("description")
    @classmethod
    def description_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_description(value)


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks.

    Every field is optional. A blank title keeps the current one; an
    explicit ``description: null`` clears the description.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    @field_validator("title")
    @classmethod
    def title_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long",
                f"Title must not exceed {TITLE_MAX_LENGTH} characters",
            )
        return value

    @field_validator("description")
    @classmethod
    def description_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_description(value)


class TaskResponse(BaseModel):
    """Task as returned by the API, with camelCase timestamps."""
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class TaskCountResponse(BaseModel):
    count: int


class TaskStatisticsResponse(BaseModel):
    total_tasks: int = Field(alias="totalTasks")
    next_id: int = Field(alias="nextId")
    tasks_by_status: Dict[str, int] = Field(alias="tasksByStatus")

    class Config:
        populate_by_name = True
