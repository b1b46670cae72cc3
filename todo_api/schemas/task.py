"""Task input validation and response shapes.

Validation is done here, before anything reaches the store: the table model
in ``todo_api.models.task`` only describes persistence.
"""
from datetime import date, datetime, time
from typing import List, Optional
import uuid

from pydantic import AliasChoices, BaseModel, Field, StrictBool, field_validator

from ..models.task import TaskCategory
from .base import APIModel

TITLE_MAX_LENGTH = 100


def clean_title(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Please add a title")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot be more than {TITLE_MAX_LENGTH} characters")
    return value


def clean_required_text(value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def parse_due_date(value):
    """Accept an ISO date or datetime; aware values become naive local time."""
    if value is None:
        return value
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("Please add a valid due date")
    else:
        raise ValueError("Please add a valid due date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class TaskFields(APIModel):
    @field_validator("title", check_fields=False)
    @classmethod
    def check_title(cls, value):
        return clean_title(value)

    @field_validator("description", check_fields=False)
    @classmethod
    def check_description(cls, value):
        return clean_required_text(value, "Please add a description")

    @field_validator("start_time", check_fields=False)
    @classmethod
    def check_start_time(cls, value):
        return clean_required_text(value, "Please add a start time")

    @field_validator("end_time", check_fields=False)
    @classmethod
    def check_end_time(cls, value):
        return clean_required_text(value, "Please add an end time")

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def check_due_date(cls, value):
        return parse_due_date(value)


class TaskCreate(TaskFields):
    title: str
    description: str
    due_date: datetime
    start_time: str
    end_time: str
    category: TaskCategory = TaskCategory.other
    completed: StrictBool = False


class TaskUpdate(TaskFields):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    category: Optional[TaskCategory] = None
    completed: Optional[StrictBool] = None

    @field_validator(
        "title", "description", "due_date", "start_time", "end_time", "category", "completed"
    )
    @classmethod
    def reject_null(cls, value, info):
        # Only reached for fields present in the payload
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class TaskRead(APIModel):
    id: uuid.UUID
    owner: uuid.UUID = Field(validation_alias=AliasChoices("owner_id", "owner"), serialization_alias="owner")
    title: str
    description: str
    due_date: datetime
    start_time: str
    end_time: str
    category: TaskCategory
    completed: bool
    created_at: datetime
    updated_at: datetime


class TaskResponse(BaseModel):
    success: bool = True
    data: TaskRead


class TaskListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[TaskRead]
